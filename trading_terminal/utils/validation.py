def validate_symbol(symbol: str) -> str:
    clean = symbol.strip().upper().replace("/", "").replace("-", "")
    if not clean or not clean.isalnum():
        raise ValueError(f"Symbol must be alphanumeric: {symbol!r}")
    return clean
