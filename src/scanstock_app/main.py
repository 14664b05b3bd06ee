from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from scanstock_sdk.config import ConfigError

from scanstock_app.app.bootstrap import ScanStockBootstrap
from scanstock_app.app.state import ScanMode
from scanstock_app.ui.shared.outcomes import ErrorPrompt, ReceiptPrompt, describe

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)


def _print(payload: object) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _announce_share(path: Path) -> None:
    print(f"Receipt ready to share: {path}")


def cmd_cart_show(app: ScanStockBootstrap, args: argparse.Namespace) -> int:
    app.cart.load()
    _print(app.checkout.summary())
    return 0


def cmd_cart_clear(app: ScanStockBootstrap, args: argparse.Namespace) -> int:
    app.cart.load()
    app.cart.clear_cart()
    print("Cart cleared.")
    return 0


def cmd_scan(app: ScanStockBootstrap, args: argparse.Namespace) -> int:
    app.start(ScanMode(args.mode))
    if not app.scanner.handle_scan(args.barcode):
        print("Scan ignored.")
        return 1
    app.scheduler.advance(app.app_config.resolution_delay_ms + app.app_config.rescan_delay_ms)
    _print([describe(outcome) for outcome in app.scanner.history])
    app.shutdown()
    return 0


def cmd_checkout(app: ScanStockBootstrap, args: argparse.Namespace) -> int:
    app.start(ScanMode.CHECKOUT)
    guard = app.checkout.handle_checkout()
    if isinstance(guard, ErrorPrompt):
        _print(describe(guard))
        return 1
    outcome = app.checkout.confirm_checkout(
        {"name": args.name, "email": args.email, "phone": args.phone},
        payment_method=args.payment_method,
        notes=args.notes,
    )
    if not isinstance(outcome, ReceiptPrompt):
        if outcome is not None:
            _print(describe(outcome))
        return 1
    path = app.checkout.share_receipt() if args.share else app.checkout.download_receipt()
    if path is None:
        _print(describe(app.checkout.history[-1]))
        return 1
    receipt_number = app.checkout.last_receipt.receipt_number
    _print({"sale_id": outcome.sale_id, "receipt_number": receipt_number, "receipt": str(path)})
    return 0


def cmd_receipts_list(app: ScanStockBootstrap, args: argparse.Namespace) -> int:
    outcome = app.saved_receipts.open()
    if isinstance(outcome, ErrorPrompt):
        _print(describe(outcome))
        return 1
    _print(app.saved_receipts.rows())
    return 0


def cmd_receipts_share(app: ScanStockBootstrap, args: argparse.Namespace) -> int:
    path = app.saved_receipts.share(args.name)
    if path is None:
        _print(describe(app.saved_receipts.history[-1]))
        return 1
    return 0


def cmd_receipts_delete(app: ScanStockBootstrap, args: argparse.Namespace) -> int:
    if not app.saved_receipts.delete(args.name):
        _print(describe(app.saved_receipts.history[-1]))
        return 1
    print(f"Deleted {args.name}.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scanstock", description="ScanStock inventory and checkout CLI")
    parser.add_argument("--env-file", default=None)
    subparsers = parser.add_subparsers(dest="command", required=True)

    cart_parser = subparsers.add_parser("cart", help="Inspect or clear the local cart")
    cart_sub = cart_parser.add_subparsers(dest="cart_command", required=True)
    cart_sub.add_parser("show").set_defaults(func=cmd_cart_show)
    cart_sub.add_parser("clear").set_defaults(func=cmd_cart_clear)

    scan_parser = subparsers.add_parser("scan", help="Resolve a barcode as the scanner would")
    scan_parser.add_argument("barcode")
    scan_parser.add_argument("--mode", choices=[mode.value for mode in ScanMode], default=ScanMode.INVENTORY.value)
    scan_parser.set_defaults(func=cmd_scan)

    checkout_parser = subparsers.add_parser("checkout", help="Submit the local cart as a sale")
    checkout_parser.add_argument("--name")
    checkout_parser.add_argument("--email")
    checkout_parser.add_argument("--phone")
    checkout_parser.add_argument("--payment-method", choices=["cash", "card", "other"], default=None)
    checkout_parser.add_argument("--notes")
    checkout_parser.add_argument("--share", action="store_true")
    checkout_parser.set_defaults(func=cmd_checkout)

    receipts_parser = subparsers.add_parser("receipts", help="Manage saved receipts")
    receipts_sub = receipts_parser.add_subparsers(dest="receipts_command", required=True)
    receipts_sub.add_parser("list").set_defaults(func=cmd_receipts_list)
    share_parser = receipts_sub.add_parser("share")
    share_parser.add_argument("name")
    share_parser.set_defaults(func=cmd_receipts_share)
    delete_parser = receipts_sub.add_parser("delete")
    delete_parser.add_argument("name")
    delete_parser.set_defaults(func=cmd_receipts_delete)
    return parser


def run(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        app = ScanStockBootstrap(share_hook=_announce_share, env_file=args.env_file)
    except ConfigError as exc:
        print(f"Configuration error: {exc}")
        return 2
    return args.func(app, args)


if __name__ == "__main__":
    raise SystemExit(run())
