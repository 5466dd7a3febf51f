"""cardbinder — locate numbered cards in a paged binder grid."""

__version__ = "0.1.0"
