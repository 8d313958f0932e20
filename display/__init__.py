"""Display helpers: value formatters, console output and table rendering."""
