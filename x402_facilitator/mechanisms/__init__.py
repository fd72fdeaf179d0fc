"""Payment mechanisms, one subpackage per network family."""
