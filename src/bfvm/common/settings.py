class RunSettings:
    verbose: bool
    listing: bool
    max_steps: int | None

    def __init__(self):
        self.verbose = False
        self.listing = False
        self.max_steps = None

    def update(
        self,
        verbose: bool | None = None,
        listing: bool | None = None,
        max_steps: int | None = None
    ):
        if verbose is not None:
            self.verbose = verbose

        if listing is not None:
            self.listing = listing

        if max_steps is not None:
            self.max_steps = max_steps

        return self
