from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.datetime_utils import now_local, parse_iso_date
from ..container import Container
from ..core.exceptions import ValidationError
from ..routing.web import current_user_id

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service

    @app.route("/dashboard", methods=["GET", "POST"], endpoint="dashboard")
    def dashboard():
        user_id = current_user_id()
        profile = container.profile_service.get(user_id)
        if container.profile_service.needs_setup(profile):
            return redirect(url_for("profile_setup"))

        if request.method == "POST":
            action = request.form.get("action", "")
            try:
                if action == "checkin":
                    attendance.check_in(user_id)
                    flash("Absen masuk berhasil!", "success")
                elif action == "checkout":
                    attendance.check_out(user_id)
                    flash("Absen pulang berhasil!", "success")
                else:
                    flash("Aksi tidak dikenal", "warning")
            except ValidationError as e:
                flash(str(e), "warning")
            except Exception:
                logger.exception("Attendance action %s failed for %s", action, user_id)
                flash("Kesalahan sistem saat absen", "danger")
            return redirect(url_for("dashboard"))

        return render_template(
            "dashboard.html",
            profile=profile,
            today=attendance.get_today_record(user_id),
            hours=attendance.hours,
            payments=container.payment_service.history_for(user_id, limit=5),
            active_page="dashboard",
        )

    @app.route("/history", endpoint="history")
    def history():
        data = attendance.get_history_ui(current_user_id())
        return render_template("history.html", data=data, active_page="history")

    @app.route("/admin/attendance", endpoint="admin_attendance")
    def admin_attendance():
        raw = (request.args.get("date") or "").strip()
        work_date = now_local().date()
        if raw:
            try:
                work_date = parse_iso_date(raw)
            except ValueError:
                flash("Tanggal tidak valid", "warning")

        return render_template(
            "admin/attendance.html",
            data=attendance.list_for_date_ui(work_date),
            work_date=work_date,
            active_page="admin_attendance",
        )
