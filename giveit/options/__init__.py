"""Buyer and recipient option trees."""

from .option_tree import OptionTree, PriceWarning, strip_recipient_prices

__all__ = ["OptionTree", "PriceWarning", "strip_recipient_prices"]
