from dotenv import load_dotenv
import os
load_dotenv()

import argparse
import logging
import sys

from . import (
    PromptPayIDType,
    ValidationError,
    build_promptpay_payload,
    encode,
    new_reference,
    parse_payload,
    verify_payload,
)
from .decoder import is_promptpay
from .qr import build_qr_png_base64, save_qr_png

logger = logging.getLogger("promptpay.cli")

# ---- System owner config (from .env) ----
SYSTEM_PROMPTPAY_ID = os.getenv("SYSTEM_PROMPTPAY_ID", "0812345678")
SYSTEM_PROMPTPAY_KIND = os.getenv("SYSTEM_PROMPTPAY_KIND", "")
QR_BOX_SIZE = int(os.getenv("QR_BOX_SIZE", "8"))
QR_BORDER = int(os.getenv("QR_BORDER", "2"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _kind(name: str | None) -> PromptPayIDType | None:
    if not name:
        return None
    try:
        return PromptPayIDType[name.strip().upper()]
    except KeyError:
        raise ValidationError(f"unknown PromptPay id type {name!r}") from None

def cmd_encode(args) -> int:
    reference = args.reference or new_reference(args.prefix)
    kind = _kind(args.kind or SYSTEM_PROMPTPAY_KIND)
    if kind is None and not (args.merchant_name or args.merchant_city):
        payload = encode(args.recipient, args.amount, reference)
    else:
        payload = build_promptpay_payload(
            args.recipient, kind, args.amount,
            reference=reference,
            merchant_name=args.merchant_name, merchant_city=args.merchant_city,
            dynamic=True,
        )
    logger.info("encoded payload for reference %s (%d chars)", reference, len(payload))
    print(payload)
    if args.png:
        save_qr_png(payload, args.png, box_size=QR_BOX_SIZE, border=QR_BORDER)
    if args.base64:
        print("data:image/png;base64," + build_qr_png_base64(payload, box_size=QR_BOX_SIZE, border=QR_BORDER))
    return 0

def cmd_verify(args) -> int:
    parsed = parse_payload(args.payload)
    ok = verify_payload(args.payload)
    kind = parsed.kind.name if parsed.kind else "-"
    print(f"promptpay:  {'yes' if is_promptpay(parsed) else 'no'}")
    print(f"account:    {parsed.account or '-'} ({kind})")
    print(f"amount:     {parsed.amount or '-'} {parsed.currency or ''}".rstrip())
    print(f"reference:  {parsed.reference or '-'}")
    print(f"checksum:   {parsed.crc} {'OK' if ok else 'MISMATCH'}")
    if not ok:
        logger.warning("checksum mismatch for payload ending %s", parsed.crc)
    return 0 if ok else 1

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="promptpay", description="PromptPay QR payload tool")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=LOG_LEVEL)
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("encode", help="build a dynamic PromptPay payload")
    p.add_argument("recipient", nargs="?", default=SYSTEM_PROMPTPAY_ID,
                   help="phone number, national/tax id or e-wallet id")
    p.add_argument("--amount", required=True, help="amount in THB, e.g. 100.50")
    p.add_argument("--reference", help="transaction reference (generated when omitted)")
    p.add_argument("--prefix", default="TOPUP", help="prefix for generated references")
    p.add_argument("--kind", choices=[k.name for k in PromptPayIDType])
    p.add_argument("--merchant-name")
    p.add_argument("--merchant-city")
    p.add_argument("--png", help="write a QR image to this path")
    p.add_argument("--base64", action="store_true", help="print the QR image as a data URI")
    p.set_defaults(func=cmd_encode)

    v = sub.add_parser("verify", help="decode a payload and check its CRC")
    v.add_argument("payload")
    v.set_defaults(func=cmd_verify)
    return parser

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    # argparse does not check defaults against choices, so LOG_LEVEL lands here unchecked
    level = args.log_level.upper()
    if level not in LOG_LEVELS:
        print(f"error: unknown log level {args.log_level!r}", file=sys.stderr)
        return 2
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        return args.func(args)
    except ValidationError as e:
        logger.warning("%s failed: %s", args.command, e)
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
