"""Utility functions for pixrevenue."""

from pixrevenue.utils.date_parser import parse_date, parse_timestamp
from pixrevenue.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_timestamp", "parse_amount"]
