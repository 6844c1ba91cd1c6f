"""Application composition layer for the weather shell.

Controllers in this package wire signal sources, view models, adapters, and
use cases into a runnable session without placing business logic in views.
"""
