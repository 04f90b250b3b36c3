"""Command line entry point: validate configuration and serve with uvicorn."""

from __future__ import annotations

import sys

from .config import get_settings
from .errors import ConfigError

EXAMPLE_ENV = """   PORT=3000
   accountnum=12345,67890
   accountname=Account 1,Account 2
   tzoffset=-07:00"""


def report_config_error(exc: ConfigError) -> None:
    print("Configuration Error:", file=sys.stderr)
    if exc.missing:
        print("  Missing required environment variables:", file=sys.stderr)
        for name in exc.missing:
            print(f"   - {name}", file=sys.stderr)
    else:
        print(f"  {exc}", file=sys.stderr)
    print("\nPlease create a .env file with the following variables:", file=sys.stderr)
    print(EXAMPLE_ENV, file=sys.stderr)
    print("\nSee .env.example for reference.", file=sys.stderr)


def main() -> None:
    """Start the Irrigation Calendar server."""
    import uvicorn

    from .app import create_app

    try:
        settings = get_settings()
    except ConfigError as exc:
        report_config_error(exc)
        sys.exit(1)

    print("Configuration validated")
    print(f"Loaded {len(settings.account_ids)} account(s): {', '.join(settings.account_names)}")

    print("\n--- Irrigation Calendar ---")
    print(f"Debug Mode: {settings.debug_mode}")
    print(f"Upstream: https://{settings.upstream_host}")
    print("Endpoints:")
    print("  GET  /             (redirects to last viewed account)")
    print("  GET  /{acct}       (HTML status page)")
    print("  GET  /{acct}.ics   (iCalendar feed)")
    print("---------------------------")

    app = create_app(settings)
    print(f"Irrigation Calendar Server running on http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
