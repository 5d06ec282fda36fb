from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..container import Container
from ..core.enums import PaymentMethod
from ..core.exceptions import PaymentProcessingError, ValidationError
from ..routing.web import current_user_id
from .service import METHOD_LABELS, parse_payment_form

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    payments = container.payment_service

    def _render_form(employee, *, error=None, form=None, status=200):
        return (
            render_template(
                "admin/salary_payment.html",
                employee=employee,
                defaults=payments.defaults_for(employee),
                banks=payments.list_active_banks(),
                employee_bank=payments.employee_bank(employee),
                history=payments.history_for(employee.id),
                methods=[(m.value, METHOD_LABELS[m]) for m in PaymentMethod],
                form=form or {},
                error=error,
                active_page="admin_salary_payment",
            ),
            status,
        )

    @app.route("/admin/salary-payment", methods=["GET", "POST"], endpoint="admin_salary_payment")
    def admin_salary_payment():
        employee_id = (request.values.get("employee_id") or "").strip()

        if not employee_id:
            return render_template(
                "admin/salary_payment.html",
                employee=None,
                employees=container.profile_service.list_employees(),
                recent=payments.recent_payments(),
                active_page="admin_salary_payment",
            )

        try:
            employee = payments.get_employee(employee_id)
        except ValidationError as e:
            flash(str(e), "warning")
            return redirect(url_for("admin_salary_payment"))

        if request.method == "GET":
            return _render_form(employee)

        try:
            payment = parse_payment_form(employee.id, request.form)
            payments.submit(payment, employee=employee, processed_by=current_user_id())
        except ValidationError as e:
            return _render_form(employee, error=str(e), form=request.form, status=400)
        except PaymentProcessingError:
            # the error dialog is already queued; keep the entered values
            return _render_form(employee, form=request.form, status=500)

        return redirect(url_for("admin_salary_payment"))
