"""Exceptions raised by augflow."""


class InvalidArgumentError(ValueError):
    """A caller-supplied argument violates a precondition.

    Raised synchronously by the call that received the bad argument: a
    non-positive capacity, an out-of-range node index, a degenerate
    source/sink pair, an unknown search strategy or a malformed network
    document.
    """


class MaxRoundsExceededError(RuntimeError):
    """The sink is still reachable after the round limit of augmenting paths.

    Exactly ``max_rounds`` paths were applied. Their flow is feasible and
    stays on the graph, so calling ``solve()`` again resumes from it.
    """

    def __init__(self, max_rounds: int, flow: float) -> None:
        super().__init__(
            f"Exceeded max_rounds={max_rounds} augmenting rounds "
            f"(flow placed so far: {flow})."
        )
        self.max_rounds = max_rounds
        self.flow = flow
