"""Line-delimited JSON transport."""

from codeguide.rpc.models import ErrorCode, ProtocolError
from codeguide.rpc.server import JsonLineServer

__all__ = ["ErrorCode", "JsonLineServer", "ProtocolError"]
