"""Codecs for the date and currency encodings used by the ticketing API."""

from rail_ticketing.domain.codecs.currency_codec import CurrencyCodec
from rail_ticketing.domain.codecs.date_normalizer import DateNormalizer, DateOrder

__all__ = ["CurrencyCodec", "DateNormalizer", "DateOrder"]
