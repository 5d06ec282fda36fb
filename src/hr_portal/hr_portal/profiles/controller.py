from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..container import Container
from ..core.exceptions import AuthorizationError, ValidationError
from ..routing.web import current_role, current_user_id

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    profiles = container.profile_service

    def _form_lookups() -> dict:
        return {
            "departments": container.department_service.list_active(),
            "positions": container.position_service.list_active(),
            "banks": container.bank_service.list_active(),
        }

    def _save_from_form(user_id: str):
        return profiles.save_profile(
            user_id=user_id,
            full_name=request.form.get("full_name", ""),
            phone=request.form.get("phone", ""),
            department_id=request.form.get("department_id"),
            position_id=request.form.get("position_id"),
            bank_id=request.form.get("bank_id"),
            bank_account=request.form.get("bank_account", ""),
        )

    def _profile_form(template_title: str, endpoint: str, success_message: str):
        user_id = current_user_id()
        if request.method == "POST":
            try:
                _save_from_form(user_id)
                flash(success_message, "success")
                return redirect(url_for("dashboard"))
            except ValidationError as e:
                flash(str(e), "warning")
            except Exception:
                logger.exception("Saving profile %s failed", user_id)
                flash("Kesalahan sistem saat menyimpan profil", "danger")

        return render_template(
            "profile_form.html",
            profile=profiles.get(user_id),
            title=template_title,
            action=url_for(endpoint),
            form=request.form,
            **_form_lookups(),
        )

    @app.route("/profile-setup", methods=["GET", "POST"], endpoint="profile_setup")
    def profile_setup():
        return _profile_form("Lengkapi Profil", "profile_setup", "Profil berhasil disimpan!")

    @app.route("/profile-editor", methods=["GET", "POST"], endpoint="profile_editor")
    def profile_editor():
        return _profile_form("Edit Profil", "profile_editor", "Profil berhasil diperbarui!")

    @app.route("/admin", endpoint="admin_panel")
    def admin_panel():
        employees = profiles.list_employees()
        return render_template(
            "admin/panel.html",
            employee_count=len(employees),
            active_count=sum(1 for e in employees if e.is_active),
            recent_payments=container.payment_service.recent_payments(limit=5),
            active_page="admin",
        )

    @app.route("/admin/users", methods=["GET", "POST"], endpoint="admin_users")
    def admin_users():
        if request.method == "POST":
            action = request.form.get("action", "")
            user_id = request.form.get("user_id", "")
            try:
                if action in ("activate", "deactivate"):
                    profiles.set_active(
                        current_role=current_role(),
                        current_user_id=current_user_id(),
                        user_id=user_id,
                        is_active=action == "activate",
                    )
                    flash("Status karyawan diperbarui", "success")
                elif action == "salary":
                    profiles.update_salary(
                        current_role=current_role(),
                        user_id=user_id,
                        salary=request.form.get("salary"),
                    )
                    flash("Gaji pokok diperbarui", "success")
                else:
                    flash("Aksi tidak dikenal", "warning")
            except AuthorizationError as e:
                return render_template("403.html", message=str(e)), 403
            except ValidationError as e:
                flash(str(e), "warning")
            except Exception:
                logger.exception("Admin user action %s on %s failed", action, user_id)
                flash("Kesalahan sistem", "danger")
            return redirect(url_for("admin_users"))

        return render_template("admin/users.html", employees=profiles.list_employees(), active_page="admin_users")
