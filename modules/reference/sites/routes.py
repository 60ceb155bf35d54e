# modules/reference/sites/routes.py
from flask import Blueprint, render_template, redirect, url_for, flash, current_app
from sqlalchemy.exc import IntegrityError
from extensions import db
from .models import Site
from .forms import SiteForm

bp = Blueprint("sites", __name__, url_prefix="/reference/sites", template_folder="templates")

@bp.route("/")
def index():
    sites = Site.query.order_by(Site.name).all()
    return render_template(
        "sites/index.html",
        sites=sites,
        create_url=url_for("sites.create")
    )


@bp.route("/create", methods=["GET", "POST"])
def create():
    form = SiteForm()
    if form.validate_on_submit():
        db.session.add(Site(name=form.name.data.strip()))
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            flash("A site with this name already exists.", "warning")
            return render_template("sites/form.html", form=form, title="Add site")
        current_app.logger.info("Site %r created", form.name.data)
        flash("Site added.", "success")
        return redirect(url_for("sites.index"))
    return render_template("sites/form.html", form=form, title="Add site")

@bp.route("/edit/<int:id>", methods=["GET", "POST"])
def edit(id):
    site = db.get_or_404(Site, id)
    form = SiteForm(obj=site)
    if form.validate_on_submit():
        site.name = form.name.data.strip()
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            flash("A site with this name already exists.", "warning")
            return render_template("sites/form.html", form=form, title="Edit site")
        flash("Changes saved.", "success")
        return redirect(url_for("sites.index"))
    return render_template("sites/form.html", form=form, title="Edit site")

@bp.route("/delete/<int:id>", methods=["POST"])
def delete(id):
    # past exits keep the site name as text, so deleting is safe
    site = db.get_or_404(Site, id)
    db.session.delete(site)
    db.session.commit()
    flash("Site deleted.", "info")
    return redirect(url_for("sites.index"))
