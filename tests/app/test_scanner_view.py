from __future__ import annotations

from scanstock_sdk.exceptions import ServerError
from scanstock_app.app.scheduler import ManualScheduler
from scanstock_app.app.state import Route, ScanMode
from scanstock_app.config import AppConfig
from scanstock_app.services.barcode_resolution import default_chain
from scanstock_app.services.cart_store import CartStore
from scanstock_app.services.catalog import InventoryCache, ProductCatalog
from scanstock_app.services.product_service import ProductService
from scanstock_app.ui.scanner.scanner_view import ScannerController
from scanstock_app.ui.shared.outcomes import ConfirmPrompt, Navigation, PromptAction, Toast, WarnPrompt

from factories import make_product
from fakes import FakeSession


def _controller(storage, products=(), remote=None, mode=ScanMode.INVENTORY):
    session = FakeSession(storage=storage)
    session.products.products = list(products)
    session.products.remote = dict(remote or {})
    service = ProductService(session)
    catalog = ProductCatalog(service)
    scheduler = ManualScheduler()
    cues: list[str] = []
    controller = ScannerController(
        config=AppConfig(),
        scheduler=scheduler,
        cart=CartStore(storage),
        catalog=catalog,
        chain=default_chain(catalog, InventoryCache(), service),
        feedback=lambda: cues.append("beep"),
    )
    controller.set_mode(mode)
    return controller, scheduler, session, cues


def test_repeat_scan_inside_window_is_suppressed(storage) -> None:
    controller, scheduler, _, _ = _controller(storage, [make_product(1, barcode="B")])

    assert controller.handle_scan("B") is True
    scheduler.advance(2000)
    assert controller.handle_scan("B") is False
    scheduler.advance(1500)
    assert controller.resolution_attempts == 1

    assert controller.handle_scan("B") is True
    scheduler.advance(1000)
    assert controller.resolution_attempts == 2


def test_suppressed_scan_changes_nothing(storage) -> None:
    controller, scheduler, session, cues = _controller(storage, [make_product(1, barcode="B")])
    controller.handle_scan("B")
    generation = controller.session.generation

    controller.handle_scan("B")

    assert controller.session.generation == generation
    assert cues == ["beep"]
    assert session.products.list_calls == 1


def test_resolution_is_deferred_after_cue_and_refresh(storage) -> None:
    controller, scheduler, session, cues = _controller(storage, [make_product(1, barcode="B")])

    controller.handle_scan("  B  ")

    assert cues == ["beep"]
    assert session.products.list_calls == 1
    assert controller.is_resolving
    scheduler.advance(999)
    assert controller.resolution_attempts == 0
    scheduler.advance(1)
    assert controller.resolution_attempts == 1
    assert not controller.is_resolving


def test_inventory_mode_found_navigates_without_touching_cart(storage) -> None:
    product = make_product(7, barcode="B", quantity=0)
    controller, scheduler, _, _ = _controller(storage, [product])

    controller.handle_scan("B")
    scheduler.advance(1000)

    assert controller.history == [Navigation(Route.PRODUCT_DETAIL, {"product_id": 7})]
    assert controller.cart.is_empty
    assert controller.session.current_barcode is None
    assert controller.session.current_product_id == 7
    assert controller.active_prompt is None


def test_checkout_mode_out_of_stock_warns_without_touching_cart(storage) -> None:
    product = make_product(7, barcode="B", quantity=0)
    controller, scheduler, _, _ = _controller(storage, [product], mode=ScanMode.CHECKOUT)

    controller.handle_scan("B")
    scheduler.advance(1000)

    prompt = controller.active_prompt
    assert isinstance(prompt, WarnPrompt)
    assert prompt.actions == (PromptAction.ACKNOWLEDGE,)
    assert controller.cart.is_empty

    controller.respond(PromptAction.ACKNOWLEDGE)
    assert controller.active_prompt is None
    assert controller.session.current_barcode is None


def test_checkout_mode_in_stock_adds_one_unit_and_toasts(storage) -> None:
    product = make_product(3, barcode="B", name="Cola", quantity=4)
    controller, scheduler, _, _ = _controller(storage, [product], mode=ScanMode.CHECKOUT)

    controller.handle_scan("B")
    scheduler.advance(1000)

    assert [(item.product_id, item.quantity) for item in controller.cart.items] == [(3, 1)]
    assert isinstance(controller.history[-1], Toast)
    assert controller.notifications.render()["messages"] == [{"level": "success", "message": "Cola added to cart"}]
    assert controller.session.current_barcode == "B"

    scheduler.advance(1000)
    assert controller.session.current_barcode is None
    assert controller.session.current_product_id == 3

    scheduler.advance(2000)
    assert controller.notifications.render()["count"] == 0


def test_inventory_not_found_offers_add_product(storage) -> None:
    controller, scheduler, session, _ = _controller(storage)

    controller.handle_scan("NEW-1")
    scheduler.advance(1000)

    prompt = controller.active_prompt
    assert isinstance(prompt, ConfirmPrompt)
    assert prompt.actions == (PromptAction.CANCEL, PromptAction.ADD_PRODUCT)
    assert session.products.lookup_calls == ["NEW-1"]

    outcome = controller.respond(PromptAction.ADD_PRODUCT)

    assert outcome == Navigation(Route.NEW_PRODUCT, {"barcode": "NEW-1"})
    assert controller.active_prompt is None


def test_inventory_not_found_cancel_resets(storage) -> None:
    controller, scheduler, _, _ = _controller(storage)
    controller.handle_scan("NEW-1")
    scheduler.advance(1000)

    assert controller.respond(PromptAction.CANCEL) is None
    assert controller.active_prompt is None
    assert controller.session.current_barcode is None


def test_checkout_not_found_offers_rescan(storage) -> None:
    controller, scheduler, _, _ = _controller(storage, mode=ScanMode.CHECKOUT)
    controller.handle_scan("X")
    scheduler.advance(1000)

    prompt = controller.active_prompt
    assert isinstance(prompt, ConfirmPrompt)
    assert prompt.actions == (PromptAction.RESCAN, PromptAction.ADD_PRODUCT)
    assert controller.respond(PromptAction.CANCEL) is None
    assert controller.active_prompt is prompt

    controller.respond(PromptAction.RESCAN)
    assert controller.active_prompt is None
    assert controller.cart.is_empty


def test_remote_match_resolves_and_failed_lookup_is_not_found(storage) -> None:
    remote = make_product(9, barcode="R", quantity=2)
    controller, scheduler, session, _ = _controller(storage, remote={"R": remote}, mode=ScanMode.CHECKOUT)

    controller.handle_scan("R")
    scheduler.advance(1000)
    assert controller.cart.find(9).quantity == 1

    session.products.fail_lookup = ServerError(code="HTTP_ERROR", message="boom", details=None, status_code=500)
    controller.handle_scan("Q")
    scheduler.advance(1000)
    assert isinstance(controller.active_prompt, ConfirmPrompt)


def test_later_scan_supersedes_pending_one(storage) -> None:
    controller, scheduler, _, _ = _controller(
        storage, [make_product(1, barcode="A"), make_product(2, barcode="B")]
    )

    controller.handle_scan("A")
    scheduler.advance(500)
    controller.handle_scan("B")
    scheduler.advance(2000)

    assert controller.resolution_attempts == 1
    assert controller.history == [Navigation(Route.PRODUCT_DETAIL, {"product_id": 2})]


def test_response_to_superseded_prompt_is_ignored(storage) -> None:
    controller, scheduler, _, _ = _controller(storage)
    controller.handle_scan("A")
    scheduler.advance(1000)
    stale = controller.active_prompt

    controller.rescan()
    controller.handle_scan("C")
    scheduler.advance(1000)

    assert controller.respond(PromptAction.ADD_PRODUCT, prompt=stale) is None
    outcome = controller.respond(PromptAction.ADD_PRODUCT, prompt=controller.active_prompt)
    assert outcome == Navigation(Route.NEW_PRODUCT, {"barcode": "C"})


def test_scans_are_ignored_while_out_of_stock_warning_is_open(storage) -> None:
    controller, scheduler, session, cues = _controller(
        storage,
        [make_product(1, barcode="OOS", quantity=0), make_product(2, barcode="OK")],
        mode=ScanMode.CHECKOUT,
    )
    controller.handle_scan("OOS")
    scheduler.advance(1000)
    warning = controller.active_prompt

    assert controller.handle_scan("OK") is False
    scheduler.advance(1000)

    assert controller.active_prompt is warning
    assert controller.cart.is_empty
    assert cues == ["beep"]
    assert session.products.list_calls == 1

    controller.respond(PromptAction.ACKNOWLEDGE)
    assert controller.handle_scan("OK") is True
    scheduler.advance(1000)
    assert [item.product_id for item in controller.cart.items] == [2]


def test_scans_are_ignored_while_not_found_prompt_is_open(storage) -> None:
    controller, scheduler, _, _ = _controller(storage)
    controller.handle_scan("A")
    scheduler.advance(1000)

    assert controller.handle_scan("B") is False
    assert controller.active_prompt.barcode == "A"


def test_mode_toggle_cancels_pending_work_and_clears_session(storage) -> None:
    controller, scheduler, _, _ = _controller(storage, [make_product(1, barcode="B")])
    controller.handle_scan("B")

    assert controller.toggle_mode() is ScanMode.CHECKOUT
    scheduler.advance(5000)

    assert controller.resolution_attempts == 0
    assert controller.session.last_scanned_barcode is None
    assert controller.session.current_product_id is None
    assert controller.handle_scan("B") is True


def test_teardown_cancels_resolution_and_toasts(storage) -> None:
    controller, scheduler, _, _ = _controller(
        storage, [make_product(1, barcode="A"), make_product(2, barcode="B")], mode=ScanMode.CHECKOUT
    )
    controller.handle_scan("A")
    scheduler.advance(1000)
    controller.handle_scan("B")

    controller.teardown()
    scheduler.advance(10_000)

    assert [item.product_id for item in controller.cart.items] == [1]
    assert controller.notifications.toasts == []
    assert scheduler.pending == []


def test_blank_and_unsupported_scans_are_ignored(storage) -> None:
    controller, scheduler, session, cues = _controller(storage)

    assert controller.handle_scan("   ") is False
    assert controller.handle_scan(None) is False
    assert controller.handle_scan("123", symbology="aztec") is False
    assert cues == []
    assert session.products.list_calls == 0
