class UnorderableItem(Exception):
    """The product is inactive or still needs a variant to be chosen."""

    def __init__(self, product):
        self.product = product
        super().__init__(f"'{product}' cannot be ordered")
