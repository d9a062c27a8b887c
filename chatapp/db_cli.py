# chatapp/db_cli.py: database maintenance CLI
import argparse, datetime, os, sys
from typing import List, Optional

# Let migrations own the schema unless `init` is asked for explicitly
os.environ.setdefault("AUTO_CREATE_TABLES", "0")

import sqlalchemy as sa

from . import create_app
from .db import connect_db, ping
from .models import db, User, Message


def _fmt_dt(dt):
    if not dt: return None
    if isinstance(dt, (datetime.datetime, datetime.date)):
        return dt.isoformat()
    return str(dt)


def print_rows(rows: List[tuple], headers: List[str]) -> None:
    if not rows:
        print("(no rows)")
        return
    widths = [len(h) for h in headers]
    for r in rows:
        for i, v in enumerate(r):
            widths[i] = max(widths[i], len("" if v is None else str(v)))
    line = " | ".join(h.ljust(widths[i]) for i, h in enumerate(headers))
    print(line)
    print("-+-".join("-" * w for w in widths))
    for r in rows:
        print(" | ".join(("" if v is None else str(v)).ljust(widths[i]) for i, v in enumerate(r)))


def cmd_init(app, args) -> int:
    with app.app_context():
        db.create_all()
        print("tables:", ", ".join(sorted(sa.inspect(db.engine).get_table_names())))
    return 0


def cmd_ping(app, args) -> int:
    if not connect_db(app):
        print("database: down")
        return 1
    with app.app_context():
        print("database:", "up" if ping() else "down")
    return 0


def cmd_users(app, args) -> int:
    with app.app_context():
        q = User.query.order_by(User.created_at.asc())
        if args.email:
            q = q.filter(User.email.ilike(f"%{args.email.lower()}%"))
        rows = []
        for u in q.limit(args.limit).all():
            sent = Message.query.filter_by(sender_id=u.user_id).count()
            rows.append((u.user_id, u.email, u.full_name, sent, _fmt_dt(u.created_at)))
    print_rows(rows, ["user_id", "email", "full_name", "sent", "created_at"])
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="chatapp-db", description="Chat backend DB utilities")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("init", help="create missing tables").set_defaults(fn=cmd_init)
    sub.add_parser("ping", help="check database connectivity").set_defaults(fn=cmd_ping)

    pu = sub.add_parser("users", help="list users")
    pu.add_argument("--email", help="substring filter on email")
    pu.add_argument("--limit", type=int, default=50)
    pu.set_defaults(fn=cmd_users)
    return p


def main(argv: Optional[List[str]] = None, app=None) -> int:
    args = build_parser().parse_args(argv)
    app = app or create_app()
    return args.fn(app, args)


if __name__ == "__main__":
    sys.exit(main())
