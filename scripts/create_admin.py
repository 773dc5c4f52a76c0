#!/usr/bin/env python3
"""Create (or reset the password of) a back office account.

Usage:
    python scripts/create_admin.py <username> <password>
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import func

from whattocook.database import SessionLocal, init_db
from whattocook.models import Admin
from whattocook.services.auth import create_admin, get_password_hash


def main(username: str, password: str) -> None:
    if len(password) < 6:
        raise SystemExit("Password must be at least 6 characters")

    init_db()
    db = SessionLocal()
    try:
        admin = db.query(Admin).filter(func.lower(Admin.username) == username.lower()).first()
        if admin:
            admin.password_hash = get_password_hash(password)
            db.commit()
            print(f"Updated password for admin '{admin.username}'")
        else:
            admin = create_admin(db, username, password)
            print(f"Created admin '{admin.username}' (id={admin.id})")
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) != 3:
        raise SystemExit(__doc__)
    main(sys.argv[1], sys.argv[2])
