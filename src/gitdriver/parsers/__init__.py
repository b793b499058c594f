"""Pure parsers from raw git output to typed records."""
