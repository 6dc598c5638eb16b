"""Message parsers for bank SMS notifications"""

from .base import MessageParser, DataTransformer
from .field_extractor import FieldExtractor
from .sms_parser import SmsParser

__all__ = ['MessageParser', 'DataTransformer', 'FieldExtractor', 'SmsParser']
