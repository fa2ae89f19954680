"""``PricingData`` — the protobuf message Yahoo!'s streamer sends per update.

The message is declared with ``descriptor_pb2`` and registered in a private
descriptor pool, which is equivalent to what ``protoc --python_out`` would
emit for the following schema::

    syntax = "proto3";
    message PricingData {
      string id = 1;  float price = 2;  sint64 time = 3;  ...
    }
"""

from __future__ import annotations

import base64
import binascii

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.message import DecodeError, Message

_F = descriptor_pb2.FieldDescriptorProto

_QUOTE_TYPES = (
    ("NONE", 0), ("ALTSYMBOL", 5), ("HEARTBEAT", 7), ("EQUITY", 8),
    ("INDEX", 9), ("MUTUALFUND", 11), ("MONEYMARKET", 12), ("OPTION", 13),
    ("CURRENCY", 14), ("WARRANT", 15), ("BOND", 17), ("FUTURE", 18),
    ("ETF", 20), ("COMMODITY", 23), ("ECNQUOTE", 28), ("CRYPTOCURRENCY", 41),
    ("INDICATOR", 42), ("INDUSTRY", 1000),
)
_MARKET_HOURS = (
    ("PRE_MARKET", 0), ("REGULAR_MARKET", 1), ("POST_MARKET", 2),
    ("EXTENDED_HOURS_MARKET", 3),
)
_OPTION_TYPES = (("CALL", 0), ("PUT", 1))

# (name, number, type, enum type name)
_FIELDS = (
    ("id", 1, _F.TYPE_STRING, None),
    ("price", 2, _F.TYPE_FLOAT, None),
    ("time", 3, _F.TYPE_SINT64, None),
    ("currency", 4, _F.TYPE_STRING, None),
    ("exchange", 5, _F.TYPE_STRING, None),
    ("quoteType", 6, _F.TYPE_ENUM, "QuoteType"),
    ("marketHours", 7, _F.TYPE_ENUM, "MarketHoursType"),
    ("changePercent", 8, _F.TYPE_FLOAT, None),
    ("dayVolume", 9, _F.TYPE_SINT64, None),
    ("dayHigh", 10, _F.TYPE_FLOAT, None),
    ("dayLow", 11, _F.TYPE_FLOAT, None),
    ("change", 12, _F.TYPE_FLOAT, None),
    ("shortName", 13, _F.TYPE_STRING, None),
    ("expireDate", 14, _F.TYPE_SINT64, None),
    ("openPrice", 15, _F.TYPE_FLOAT, None),
    ("previousClose", 16, _F.TYPE_FLOAT, None),
    ("strikePrice", 17, _F.TYPE_FLOAT, None),
    ("underlyingSymbol", 18, _F.TYPE_STRING, None),
    ("openInterest", 19, _F.TYPE_SINT64, None),
    ("optionsType", 20, _F.TYPE_ENUM, "OptionType"),
    ("miniOption", 21, _F.TYPE_SINT64, None),
    ("lastSize", 22, _F.TYPE_SINT64, None),
    ("bid", 23, _F.TYPE_FLOAT, None),
    ("bidSize", 24, _F.TYPE_SINT64, None),
    ("ask", 25, _F.TYPE_FLOAT, None),
    ("askSize", 26, _F.TYPE_SINT64, None),
    ("priceHint", 27, _F.TYPE_SINT64, None),
    ("vol_24hr", 28, _F.TYPE_SINT64, None),
    ("volAllCurrencies", 29, _F.TYPE_SINT64, None),
    ("fromcurrency", 30, _F.TYPE_STRING, None),
    ("lastMarket", 31, _F.TYPE_STRING, None),
    ("circulatingSupply", 32, _F.TYPE_DOUBLE, None),
    ("marketcap", 33, _F.TYPE_DOUBLE, None),
)

_PACKAGE = "yahoofinance"


def _file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    proto = descriptor_pb2.FileDescriptorProto(
        name="yahoofinance/pricing.proto", package=_PACKAGE, syntax="proto3",
    )
    msg = proto.message_type.add(name="PricingData")
    for enum_name, values in (
        ("QuoteType", _QUOTE_TYPES),
        ("MarketHoursType", _MARKET_HOURS),
        ("OptionType", _OPTION_TYPES),
    ):
        enum = msg.enum_type.add(name=enum_name)
        for value_name, number in values:
            enum.value.add(name=value_name, number=number)

    for name, number, ftype, enum_name in _FIELDS:
        field = msg.field.add(name=name, number=number, type=ftype, label=_F.LABEL_OPTIONAL)
        if enum_name:
            field.type_name = f".{_PACKAGE}.PricingData.{enum_name}"
    return proto


_POOL = descriptor_pool.DescriptorPool()
_POOL.AddSerializedFile(_file_descriptor().SerializeToString())

PricingData: type[Message] = message_factory.GetMessageClass(
    _POOL.FindMessageTypeByName(f"{_PACKAGE}.PricingData")
)


def decode_pricing(payload: str | bytes) -> Message:
    """Decode one base64-encoded ``PricingData`` frame.

    Raises:
        ValueError: If the payload is not valid base64 or protobuf.
    """
    try:
        raw = base64.b64decode(payload, validate=True)
        return PricingData.FromString(raw)
    except (binascii.Error, DecodeError) as exc:
        raise ValueError(f"undecodable pricing frame: {exc}") from exc


def encode_pricing(**fields: object) -> str:
    """Build a base64 ``PricingData`` frame (the inverse of ``decode_pricing``)."""
    return base64.b64encode(PricingData(**fields).SerializeToString()).decode("ascii")
