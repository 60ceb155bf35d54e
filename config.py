import os

basedir = os.path.abspath(os.path.dirname(__file__))

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-key')

    uri = os.environ.get('DATABASE_URL')

    if uri and uri.startswith('postgresql://'):
        uri = uri.replace('postgresql://', 'postgresql+psycopg://', 1)

    SQLALCHEMY_DATABASE_URI = uri or f"sqlite:///{os.path.join(basedir, 'instance', 'stock.db')}"
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # QR codes: PNG directory and the base URL encoded into each image
    QR_CODE_DIR = os.environ.get('QR_CODE_DIR', os.path.join(basedir, 'qrcodes'))
    PUBLIC_BASE_URL = os.environ.get('PUBLIC_BASE_URL', 'http://localhost:3000')
    QR_CODE_WIDTH = int(os.environ.get('QR_CODE_WIDTH', 512))
    QR_ENTRY_COLOR = os.environ.get('QR_ENTRY_COLOR', '#00FF00')
    QR_EXIT_COLOR = os.environ.get('QR_EXIT_COLOR', '#FF0000')
    QR_BACKGROUND_COLOR = os.environ.get('QR_BACKGROUND_COLOR', '#FFFFFF')

    PORT = int(os.environ.get('PORT', 3000))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
