"""
Data layer for the swap quoter

Currency and tick records plus the sorted tick store
"""

from .types import Currency, Tick
from .tick_data_store import TickDataStore
