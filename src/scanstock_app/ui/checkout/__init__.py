from scanstock_app.ui.checkout.checkout_view import CheckoutController

__all__ = ["CheckoutController"]
