"""asyncio-demo CLI (package entrypoint).

Wires argument parsing (``cli_parser``) to the subcommand handlers
(``cli_actions``). Running without a subcommand defaults to ``stream``.

Public API re-exports:
- ``main``: CLI entrypoint callable
"""

from __future__ import annotations

import json
import sys
from typing import Optional

from ...base.errors import AsyncDemoError
from ...base.logging import configure_logger
from ...config import get_demo_config
from .cli_actions import EXIT_ERROR, HANDLERS
from .cli_parser import SUBCOMMANDS, build_parser


def main(argv: Optional[list[str]] = None) -> int:
	"""CLI entrypoint.

	Parameters
	----------
	argv: Optional[list[str]]
		Argument vector; when ``None`` uses ``sys.argv[1:]``.

	Returns
	-------
	int
		Process exit code: 0 completed, 1 rejected by the library, 3 cancelled.
		argparse exits with 2 on a malformed command line.
	"""
	cfg = get_demo_config()
	p = build_parser(cfg)
	argv_list = list(sys.argv[1:] if argv is None else argv)
	if not argv_list or (argv_list[0] not in SUBCOMMANDS and argv_list[0] not in {"-h", "--help"}):
		argv_list = ["stream"] + argv_list
	args = p.parse_args(argv_list)

	configure_logger(level=args.log_level or cfg.log_level, file_path=args.log_file, json_mode=cfg.log_json)
	try:
		return HANDLERS[args.cmd](args)
	except AsyncDemoError as exc:
		print(json.dumps({"event": "error", "code": exc.code.value, "message": exc.message}), file=sys.stderr)
		return EXIT_ERROR


if __name__ == "__main__":  # pragma: no cover
	raise SystemExit(main())
