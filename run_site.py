#!/usr/bin/env python3
"""RiseUp Youth Football — public site and content admin.

Launch: python3 run_site.py
Serves at http://0.0.0.0:8000 (or PORT env var)
"""

import os

import uvicorn

from riseup_site.config import HOST, PORT


def main():
    print("=" * 60)
    print("  RiseUp Youth Football — Site + Content Admin")
    print("=" * 60)

    if not os.environ.get("SUPABASE_URL", ""):
        print("\n  WARNING: SUPABASE_URL not set. Set environment variables:")
        print("    SUPABASE_URL, SUPABASE_SERVICE_KEY, SUPABASE_ANON_KEY")
        print("  Continuing anyway for local development...\n")

    if not os.environ.get("ANTHROPIC_API_KEY", ""):
        print("  NOTE: ANTHROPIC_API_KEY not set — the content assistant will answer 503.\n")

    url = f"http://{HOST}:{PORT}"
    print(f"  Site:  {url}")
    print(f"  Admin: {url}/admin/dashboard")
    print("  Press Ctrl+C to stop\n")

    from riseup_site.app import create_app
    app = create_app()
    uvicorn.run(app, host=HOST, port=PORT, log_level="info")


if __name__ == "__main__":
    main()
