"""Example: drive the service layer without Flask.

Signs the demo employee in with a dict as token storage, runs the route
guard for a few paths and prints the recent salary payments.
"""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.hr_portal.hr_portal.auth.client import TokenStorage
from src.hr_portal.hr_portal.container import build_container
from src.hr_portal.hr_portal.routing.shell import ApplicationShell


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    auth = container.auth_client(TokenStorage({}))
    shell = ApplicationShell(auth, container.role_resolver, path="/admin")
    shell.on_change(lambda snap: print(f"{snap.path}: {snap.state.value} -> {snap.decision}"))
    shell.start()

    auth.sign_in_with_password("karyawan@hrportal.local", "karyawan123")
    for path in ("/dashboard", "/admin/salary-payment", "/login", "/does-not-exist"):
        shell.navigate(path)

    for payment in container.payment_service.recent_payments(limit=5):
        print(payment.payment_date, payment.employee_name, payment.total_amount)

    auth.sign_out()
    shell.stop()


if __name__ == "__main__":
    main()
