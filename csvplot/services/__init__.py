"""Services built on top of a parsed dataset and the parse worker."""
