def mutate_then_reload(mutate, reload):
    """Run a write, then return a fresh read instead of patching local state.

    Errors from ``mutate`` propagate and ``reload`` is skipped.
    """
    mutate()
    return reload()
