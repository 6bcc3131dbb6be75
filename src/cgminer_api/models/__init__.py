"""Data models for response records and the status section."""

from .base import AbstractResponse, Response, decode_record
from .devices import Device
from .pools import Pool
from .status import Status
from .summary import Summary
from .system import Config, Version
