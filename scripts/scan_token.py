"""One-off token scan from the command line.

Runs the same pipeline as the API and prints the JSON response body.

Usage:
    python scripts/scan_token.py ethereum 0xdAC17F958D2ee523a2206206994597C13D831ec7
    python scripts/scan_token.py solana DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263 --log-level DEBUG
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from scanner.api.schemas import scan_response, token_info_out  # noqa: E402
from scanner.core.errors import ScanError, SecurityDataUnavailableError  # noqa: E402
from scanner.core.pipeline import close_scanner, get_scanner  # noqa: E402
from scanner.utils.logger import setup_logger  # noqa: E402


async def scan(network: str, address: str) -> int:
    scanner = get_scanner()
    try:
        result = await scanner.scan(network, address)
    except SecurityDataUnavailableError as e:
        body = {"error": str(e)}
        if e.profile is not None:
            body["tokenInfo"] = token_info_out(e.profile).model_dump()
        print(json.dumps(body, indent=2))
        return 2
    except ScanError as e:
        print(json.dumps({"error": str(e)}, indent=2))
        return 1
    finally:
        await close_scanner()

    print(json.dumps(scan_response(result).model_dump(), indent=2))
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Scan a token and print its risk report")
    parser.add_argument("network", choices=["ethereum", "bsc", "polygon", "solana"])
    parser.add_argument("address")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    setup_logger(level=args.log_level)
    sys.exit(asyncio.run(scan(args.network, args.address)))


if __name__ == "__main__":
    main()
