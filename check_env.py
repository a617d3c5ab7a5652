#!/usr/bin/env python3
"""Helper script to check and create the .env file for the Supabase connection."""

from pathlib import Path
import os
import sys

SECRET_KEYS = ("CRM_SUPABASE_KEY",)

TEMPLATE = """# Supabase Configuration (required)
# Get these from: https://supabase.com/dashboard -> Your Project -> Settings -> API
CRM_SUPABASE_URL=https://your-project-id.supabase.co
CRM_SUPABASE_KEY=your-service-role-key-here

# API Configuration
CRM_API_PREFIX=/api
# CRM_FRONTEND_ALLOWED_ORIGINS - JSON array or comma-separated list
# CRM_FRONTEND_ALLOWED_ORIGINS=http://localhost:5173,http://127.0.0.1:5173

# Registry behaviour
# CRM_PAGE_SIZE=10
# CRM_SEARCH_DEBOUNCE_SECONDS=0.4
# CRM_REPORT_MAX_ROWS=10000
# CRM_SESSION_IDLE_SECONDS=1800
"""


def _mask(line: str) -> str:
    name, sep, value = line.partition("=")
    if sep and name.strip() in SECRET_KEYS and len(value.strip()) > 20:
        value = value.strip()
        return f"{name}={value[:20]}...{value[-10:]}"
    return line


def main() -> int:
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Supabase Environment Variables Checker")
    print("=" * 60)

    if not env_file.exists():
        env_file.write_text(TEMPLATE, encoding="utf-8")
        print(f"Created template .env file at: {env_file}")
        print("Please edit .env and add your Supabase credentials.")
        return 1

    print(f"Found .env file at: {env_file}")
    print("-" * 60)
    for line in env_file.read_text(encoding="utf-8").splitlines():
        print(_mask(line))
    print("-" * 60)

    for name in ("CRM_SUPABASE_URL", "CRM_SUPABASE_KEY"):
        value = os.getenv(name)
        print(f"{name} (environment): {'set' if value else 'not set'}")

    sys.path.insert(0, str(project_root / "src"))
    from crm_panel.config import settings

    if settings.supabase_url and settings.supabase_key:
        print("SUCCESS: Supabase is configured.")
        return 0

    print("ERROR: Supabase is NOT configured.")
    print("Make sure variables start with the CRM_ prefix and restart the backend after editing .env")
    return 1


if __name__ == "__main__":
    sys.exit(main())
