from __future__ import annotations

import argparse
import json
from pathlib import Path

from heirloom.config import get_settings
from heirloom.main import configure_logging
from heirloom.services.gedcom_import.pipeline import import_gedcom
from heirloom.version import get_app_version


def _import_command(args: argparse.Namespace) -> int:
    content = Path(args.file).read_text(encoding="utf-8", errors="replace")
    result = import_gedcom(content, args.user_id, args.max_generations, home_xref=args.home)
    if args.persist:
        from heirloom.db import init_db, session_scope
        from heirloom.services.tree_store import store_import

        init_db()
        with session_scope() as db:
            store_import(db, result)

    payload = {
        "tree_id": result.tree.id,
        "home_person_id": result.tree.home_person_id,
        "profile_count": len(result.profiles),
        "persisted": bool(args.persist),
        "profiles": [
            {
                "id": profile.id,
                "name": profile.name,
                "birth_year": profile.birth_year,
                "death_year": profile.death_year,
                "parents": len(profile.parent_ids),
                "spouses": len(profile.spouse_ids),
                "children": len(profile.child_ids),
            }
            for profile in result.profiles
        ],
    }
    print(json.dumps(payload, indent=2))
    return 0


def _serve_command(args: argparse.Namespace) -> int:
    try:
        import uvicorn
    except ImportError as exc:
        raise RuntimeError("uvicorn is required. Install dependencies with: pip install -e .") from exc

    uvicorn.run("heirloom.main:app", host=args.host, port=args.port, reload=False, log_level="info")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="heirloom", description="Import GEDCOM family trees into memorial profiles")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_app_version()}")
    parser.add_argument("--log-level", default=None)
    commands = parser.add_subparsers(dest="command", required=True)

    importer = commands.add_parser("import", help="Import a GEDCOM file")
    importer.add_argument("file")
    importer.add_argument("--user-id", required=True)
    importer.add_argument("--max-generations", type=int, default=get_settings().default_max_generations)
    importer.add_argument("--home", default=None, help="Cross-reference key of the home individual")
    importer.add_argument("--persist", action="store_true", help="Write the import to the configured database")
    importer.set_defaults(handler=_import_command)

    serve = commands.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8765)
    serve.set_defaults(handler=_serve_command)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    return args.handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
