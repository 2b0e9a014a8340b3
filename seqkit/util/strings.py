def concatenate(*values: object) -> str:
    """Join ``values`` as strings, in order. ``None`` counts as an empty string."""
    return "".join(str(value) for value in values if value is not None)
