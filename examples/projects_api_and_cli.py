#!/usr/bin/env python3
"""
Example listing projects through both transports of one client.

The client defaults to the HTTP API; a single call can be routed through the
Abstract CLI with a per-call option, and the result comes back in the same
shape either way.

Requirements:
- ABSTRACT_TOKEN and ABSTRACT_API_URL environment variables set
- ABSTRACT_ORGANIZATION_ID for the organization to list
- Optional: ABSTRACT_CLI_PATH to also list through the CLI

Usage:
    python examples/projects_api_and_cli.py
"""

import os

from dotenv import load_dotenv

from abstract_sdk import AbstractClient, AbstractSDKError

load_dotenv()


def main() -> None:
    print("Abstract Projects - API and CLI")
    print("=" * 50)

    token = os.getenv("ABSTRACT_TOKEN")
    organization_id = os.getenv("ABSTRACT_ORGANIZATION_ID")
    if not (token and os.getenv("ABSTRACT_API_URL") and organization_id):
        print("Skipping: ABSTRACT_TOKEN, ABSTRACT_API_URL and ABSTRACT_ORGANIZATION_ID are required")
        return

    with AbstractClient() as client:
        try:
            projects = client.projects.list(organization_id)
            print(f"\n1. API: found {len(projects)} projects")
            for project in projects[:3]:
                print(f"   - {project.get('name', 'Unknown')} ({project.get('id')})")

            if client.config.cli_executable_path:
                via_cli = client.projects.list(
                    organization_id, options={"transport_mode": "cli"}
                )
                print(f"\n2. CLI: found {len(via_cli)} projects")
            else:
                print("\n2. CLI: skipped, ABSTRACT_CLI_PATH not set")

        except AbstractSDKError as e:
            print(f"\nError: {e}")


if __name__ == "__main__":
    main()
