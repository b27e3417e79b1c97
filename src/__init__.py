"""intercon-fx: cross-currency rates and currency-converting transfers."""
