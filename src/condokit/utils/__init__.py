"""Utility functions for condokit."""

from condokit.utils.serial_dates import serial_to_date, date_to_serial, get_quarter, get_year
from condokit.utils.amount_parser import to_amount, round_amount

__all__ = [
    "serial_to_date",
    "date_to_serial",
    "get_quarter",
    "get_year",
    "to_amount",
    "round_amount",
]
