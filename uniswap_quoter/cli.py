"""
Command line quoting

Two entry points sharing one request format:
    get-input-amount   input needed for an exact output  (exact output quote)
    get-output-amount  output for an exact input         (exact input quote)

The ten fields may be given as one comma-joined argument or as ten
positional arguments. On success the computed amount is written to stdout as
a 0x-prefixed 32-byte ABI uint256; on failure the error goes to stderr and the
exit code is 1. Logs go to stderr so stdout carries only the result.
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from .api.schemas import QUOTE_FIELDS, QuoteRequest
from .config import settings
from .exceptions import QuoterError
from .quoter import encode_uint256, quote

logger = logging.getLogger(__name__)

_EXAMPLE_POOL = (
    '11155111,"0x7db8A8D1E9483115b9e8028d610e3C365c649f6a",18,161189,'
    '"3162275221685340688940","250541255178517414234103244537599",3000,60'
)

_INPUT_EPILOG = f"""
Examples:
  # X ETH -> 1_000_000 Token
  get-input-amount {_EXAMPLE_POOL},"0x7db8A8D1E9483115b9e8028d610e3C365c649f6a","1000000000000000000000000"

  # X Token -> 1 ETH
  get-input-amount {_EXAMPLE_POOL},"0x0000000000000000000000000000000000000000","1000000000000000000"
"""

_OUTPUT_EPILOG = f"""
Examples:
  # 1 ETH -> X Token
  get-output-amount {_EXAMPLE_POOL},"0x0000000000000000000000000000000000000000","1000000000000000000"

  # 1_000_000 Token -> X ETH
  get-output-amount {_EXAMPLE_POOL},"0x7db8A8D1E9483115b9e8028d610e3C365c649f6a","1000000000000000000000000"
"""


def build_parser(exact_input: bool) -> argparse.ArgumentParser:
    if exact_input:
        prog, side, epilog = "get-output-amount", "input", _OUTPUT_EPILOG
        description = "Output amount for an exact input amount"
    else:
        prog, side, epilog = "get-input-amount", "output", _INPUT_EPILOG
        description = "Input amount required for an exact output amount"

    parser = argparse.ArgumentParser(
        prog=prog,
        description=description,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    field_names = list(QUOTE_FIELDS)
    field_names[-2] = f"{side}_currency_address"
    field_names[-1] = f"{side}_raw_amount"
    parser.add_argument(
        "fields",
        nargs="*",
        help="<" + ">,<".join(field_names) + "> as one comma-joined argument or ten arguments",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    return parser


def parse_request(fields: Sequence[str]) -> QuoteRequest:
    """Ten fields, either already split or as a single comma-joined string"""
    if len(fields) == 1:
        fields = fields[0].split(",")
    return QuoteRequest.from_fields(list(fields))


def run(argv: Optional[List[str]], exact_input: bool) -> int:
    parser = build_parser(exact_input)
    args = parser.parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level="DEBUG" if args.verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.fields:
        parser.print_help(sys.stderr)
        return 1

    try:
        request = parse_request(args.fields)
        pool = request.build_pool()
        result = quote(pool, request.specified_currency(), request.raw_amount, exact_input)
    except (ValueError, QuoterError) as e:
        logger.debug("quote failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write("0x" + encode_uint256(result.amount).hex())
    sys.stdout.flush()
    return 0


def get_input_amount(argv: Optional[List[str]] = None) -> int:
    """Entry point: input needed to receive an exact output"""
    return run(argv, exact_input=False)


def get_output_amount(argv: Optional[List[str]] = None) -> int:
    """Entry point: output received for an exact input"""
    return run(argv, exact_input=True)


if __name__ == "__main__":
    sys.exit(get_output_amount())
