import click
from flask import current_app
from flask.cli import with_appcontext

from app.extensions import db, bcrypt
from app.models import User
from app.utils.decorators import ADMIN


@click.command("seed-admin")
@click.option("--password", envvar="SUPERADMIN_PASSWORD", default="admin123")
@click.option("--username", envvar="SUPERADMIN_USERNAME", default="admin")
@with_appcontext
def seed_admin(password, username):
    """Create the tables and the predefined admin account if missing."""
    db.create_all()

    email = current_app.config["SUPERADMIN_EMAIL"]
    admin = User.query.filter_by(email=email).first()
    if admin:
        click.echo(f"Admin {email} already exists")
        return

    admin = User(
        email=email,
        username=username,
        password_hash=bcrypt.generate_password_hash(password).decode("utf-8"),
        role=ADMIN,
    )
    db.session.add(admin)
    db.session.commit()
    click.echo(f"Created admin: {email}")
