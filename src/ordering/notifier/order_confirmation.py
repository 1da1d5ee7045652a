"""Order confirmation message, sent once an order has been placed."""


class OrderConfirmationTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        barcode = context.get("barcode", "N/A")
        total_amount = context.get("total_amount", 0.0)
        lines = "\n".join(
            f"  {item['quantity']} x {item['product_name']}  {item['total_price']:.2f}"
            for item in context.get("items", [])
        )
        return {
            "subject": f"Order {barcode} received",
            "body": (
                f"We have received your order {barcode}.\n\n"
                f"{lines}\n\n"
                f"Order Total: {total_amount:.2f}\n\n"
                "You can follow its progress with the order number above."
            ),
        }
