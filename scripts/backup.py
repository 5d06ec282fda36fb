"""Dump the HR portal database with ``mysqldump``.

Salary payments and profiles are the only data that cannot be rebuilt
from seed.sql, so ``--payments-only`` limits the dump to those tables.
"""

from __future__ import annotations

import argparse
import importlib
import subprocess
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

PAYMENT_TABLES = ("auth_users", "profiles", "salary_payments")


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Backup the HR portal database")
    parser.add_argument("--payments-only", action="store_true", help="dump only users, profiles and payments")
    parser.add_argument("--out-dir", default=str(REPO_ROOT / "backups"))
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db = settings.DB_CONFIG

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"{db['database']}_{ts}.sql"

    cmd = [
        "mysqldump",
        f"-h{db['host']}",
        f"-P{db.get('port', 3306)}",
        f"-u{db['user']}",
        f"-p{db['password']}",
        "--single-transaction",
        db["database"],
    ]
    if args.payments_only:
        cmd.extend(PAYMENT_TABLES)

    try:
        with out_file.open("wb") as f:
            subprocess.run(cmd, stdout=f, stderr=subprocess.PIPE, check=True)
    except FileNotFoundError:
        raise SystemExit("`mysqldump` not found. Install the MySQL client tools first.")
    except subprocess.CalledProcessError as e:
        out_file.unlink(missing_ok=True)
        raise SystemExit(f"mysqldump failed: {e.stderr.decode(errors='replace').strip()}")
    print(f"OK: backup created: {out_file}")


if __name__ == "__main__":
    main()
