def register_blueprints(app):
    from modules.products import products_bp
    from modules.warehouse import warehouse_bp
    from modules.reference.routes import bp as reference_bp
    from modules.reference.sites.routes import bp as sites_bp

    # Products, QR codes and the entry/exit pages they point to
    app.register_blueprint(products_bp)
    app.register_blueprint(warehouse_bp)

    # Reference data
    app.register_blueprint(reference_bp)
    app.register_blueprint(sites_bp)
