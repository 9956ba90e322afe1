#!/usr/bin/env python3
"""
Smoke client for a running PDF Metadata Extraction API.

Requires httpx (pip install -e ".[scripts]").

Usage:
    python scripts/try_extract.py path/to/document.pdf [--api-url URL] [--output output.json]
"""

import argparse
import json
import os
import sys
from pathlib import Path

import httpx


def main() -> int:
    parser = argparse.ArgumentParser(description="POST a PDF to /extract and save the result")
    parser.add_argument("pdf", type=Path, help="PDF file to upload")
    parser.add_argument(
        "--api-url",
        default=os.getenv("API_URL", "http://localhost:3001"),
        help="Base URL of the API (default: $API_URL or http://localhost:3001)",
    )
    parser.add_argument("--output", type=Path, default=Path("output.json"))
    parser.add_argument("--timeout", type=float, default=180.0)
    args = parser.parse_args()

    print(f"Testing API at {args.api_url}\n")

    with args.pdf.open("rb") as fh:
        response = httpx.post(
            f"{args.api_url}/extract",
            files={"file": (args.pdf.name, fh, "application/pdf")},
            timeout=args.timeout,
        )

    data = response.json()
    if response.is_success:
        args.output.write_text(json.dumps(data, indent=2), encoding="utf-8")
        stats = data["stats"]
        print(f"Success! Results saved to {args.output}")
        print(f"Stats: {stats['pageCount']} pages, {stats['textLength']} chars")
        return 0

    print(f"Error ({response.status_code}): {data.get('error')}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
