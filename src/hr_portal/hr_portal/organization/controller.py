from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.validators import optional_int
from ..container import Container
from ..core.exceptions import ValidationError
from .service import LookupService

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _lookup_page(service: LookupService, endpoint: str):
        if request.method == "POST":
            action = request.form.get("action", "")
            try:
                if action == "create":
                    service.create(request.form.get("name", ""))
                    flash(f"{service.label} berhasil ditambahkan", "success")
                elif action in ("activate", "deactivate"):
                    item_id = optional_int(request.form.get("item_id"))
                    if item_id is None:
                        raise ValidationError(f"{service.label} tidak ditemukan")
                    service.set_active(item_id, is_active=action == "activate")
                    flash(f"Status {service.label.lower()} diperbarui", "success")
                else:
                    flash("Aksi tidak dikenal", "warning")
            except ValidationError as e:
                flash(str(e), "warning")
            except Exception:
                logger.exception("%s action %s failed", service.label, action)
                flash("Kesalahan sistem", "danger")
            return redirect(url_for(endpoint))

        return render_template(
            "admin/lookup.html",
            label=service.label,
            items=service.list_all(),
            action=url_for(endpoint),
            active_page=endpoint,
        )

    @app.route("/admin/departments", methods=["GET", "POST"], endpoint="admin_departments")
    def admin_departments():
        return _lookup_page(container.department_service, "admin_departments")

    @app.route("/admin/positions", methods=["GET", "POST"], endpoint="admin_positions")
    def admin_positions():
        return _lookup_page(container.position_service, "admin_positions")

    @app.route("/admin/bank", methods=["GET", "POST"], endpoint="admin_bank")
    def admin_bank():
        return _lookup_page(container.bank_service, "admin_bank")

    @app.route("/admin/location", methods=["GET", "POST"], endpoint="admin_location")
    def admin_location():
        if request.method == "POST":
            try:
                container.location_service.save(
                    name=request.form.get("name", ""),
                    latitude=request.form.get("latitude", ""),
                    longitude=request.form.get("longitude", ""),
                    radius_meters=request.form.get("radius_meters", ""),
                )
                flash("Lokasi kantor disimpan", "success")
                return redirect(url_for("admin_location"))
            except ValidationError as e:
                flash(str(e), "warning")
            except Exception:
                logger.exception("Saving office location failed")
                flash("Kesalahan sistem", "danger")

        return render_template(
            "admin/location.html",
            location=container.location_service.get(),
            form=request.form,
            active_page="admin_location",
        )
