# -*- coding: utf-8 -*-
# Copyright (c) 2021-2025, Francis Clairicia-Rose-Claire-Josephine
#
#
"""Resolve, then connect

netdial turns an endpoint (a socket address, or a host name and a port) into one ready-to-use socket
"""

from __future__ import annotations

__all__ = [
    "AllAttemptsFailedError",
    "AsyncResolver",
    "DialError",
    "DialStrategy",
    "Endpoint",
    "GetAddrInfoResolver",
    "HostEndpoint",
    "MalformedEndpointError",
    "NoAddressesAvailableError",
    "ResolutionError",
    "SocketAddressEndpoint",
    "dispatch",
    "tcp_connect_chain",
    "tcp_connect_race",
    "tcp_listen_chain",
    "to_endpoint",
    "udp_bind_chain",
]

__author__ = "FrankySnow9"
__contact__ = "clairicia.rcj.francis@gmail.com"
__copyright__ = "Copyright (c) 2021-2025, Francis Clairicia-Rose-Claire-Josephine"
__credits__ = ["FrankySnow9"]
__deprecated__ = False
__email__ = "clairicia.rcj.francis@gmail.com"
__license__ = "Apache-2.0"
__maintainer__ = "FrankySnow9"
__status__ = "Development"
__version__ = "1.0.0"

from .dial import DialStrategy, dispatch, tcp_connect_chain, tcp_connect_race, tcp_listen_chain, udp_bind_chain
from .endpoint import Endpoint, HostEndpoint, SocketAddressEndpoint, to_endpoint
from .exceptions import (
    AllAttemptsFailedError,
    DialError,
    MalformedEndpointError,
    NoAddressesAvailableError,
    ResolutionError,
)
from .resolver import AsyncResolver, GetAddrInfoResolver
