"""Route modules included by translator.main."""
