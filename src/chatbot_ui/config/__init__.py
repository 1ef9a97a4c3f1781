"""Runtime settings for the configurator."""
