from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..container import Container
from ..core.exceptions import AuthenticationError, ValidationError
from ..routing.web import current_auth, follow_guard

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        if request.method == "POST":
            try:
                current_auth().sign_in_with_password(
                    request.form.get("email", ""),
                    request.form.get("password", ""),
                )
                session.permanent = bool(request.form.get("remember_me"))
                flash("Login berhasil!", "success")
                return follow_guard() or redirect(url_for("root"))
            except (AuthenticationError, ValidationError) as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Login failed")
                flash("Kesalahan sistem saat login", "danger")

        return render_template("login.html", email=request.form.get("email", ""))

    @app.route("/register", methods=["GET", "POST"], endpoint="register")
    def register_view():
        if request.method == "POST":
            try:
                current_auth().sign_up(
                    request.form.get("email", ""),
                    request.form.get("password", ""),
                    request.form.get("full_name", ""),
                )
                flash("Akun berhasil dibuat. Lengkapi profil Anda.", "success")
                return follow_guard() or redirect(url_for("root"))
            except (AuthenticationError, ValidationError) as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Registration failed")
                flash("Kesalahan sistem saat mendaftar", "danger")

        return render_template(
            "register.html",
            email=request.form.get("email", ""),
            full_name=request.form.get("full_name", ""),
        )

    @app.route("/logout", methods=["GET", "POST"], endpoint="logout")
    def logout():
        try:
            current_auth().sign_out()
        except Exception:
            # token is already gone from the cookie; a stale row simply expires
            logger.exception("Sign-out failed")
        flash("Anda telah keluar.", "info")
        return follow_guard() or redirect(url_for("login"))
