"""
pyutquery - Query Session
Sends the status queries to a game server and assembles its replies.
"""

import logging
import select
import socket
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .config import QueryConfig
from .config.validation import ConfigValidationError, validate_host, validate_port
from .models import ServerInfo
from .protocol.constants import DEFAULT_QUERY_PORT, REPLY_COUNT, QueryType
from .protocol.reader import ProtocolError
from .protocol.replies import decode_reply
from .protocol.writer import REQUEST_PACKETS

logger = logging.getLogger(__name__)


class QueryError(Exception):
    """Base exception for query session errors"""
    pass


class QueryConnectionError(QueryError):
    """Raised when the server address cannot be resolved or reached"""
    pass


class QueryTimeoutError(QueryError):
    """Raised when a reply does not arrive before the read deadline"""
    pass


class QueryCancelledError(QueryError):
    """Raised when a waiting session is cancelled"""
    pass


@dataclass
class QueryResponse:
    """Outcome of one query session."""
    success: bool
    server: ServerInfo = field(default_factory=ServerInfo)
    error: str = ""
    received: List[QueryType] = field(default_factory=list)  # Recognised replies in arrival order
    ignored: int = 0  # Datagrams that matched no reply or failed to decode
    cancelled: bool = False

    @property
    def complete(self) -> bool:
        """True when the query succeeded and every reply type was decoded."""
        return self.success and set(self.received) >= set(QueryType)


def parse_address(address: str, default_port: int = DEFAULT_QUERY_PORT) -> Tuple[str, int]:
    """Split "host:port" into its parts.

    Accepts "host:port", "[ipv6]:port" and a bare host (or bare IPv6 address),
    which gets default_port.

    Raises:
        ValueError: the address or its port is invalid
    """
    if not isinstance(address, str):
        raise ValueError(f"Address must be a string, not {type(address).__name__}")

    address = address.strip()
    if address.startswith('['):
        end = address.find(']')
        rest = address[end + 1:] if end != -1 else ''
        if end == -1 or (rest and not rest.startswith(':')):
            raise ValueError(f"Invalid address: {address!r}")
        host, port_str = address[1:end], rest[1:]
        if rest and not port_str:
            raise ValueError(f"Missing port in address {address!r}")
    elif address.count(':') == 1:
        host, port_str = address.split(':')
        if not port_str:
            raise ValueError(f"Missing port in address {address!r}")
    else:
        host, port_str = address, ''

    if port_str:
        try:
            port = int(port_str)
        except ValueError:
            raise ValueError(f"Invalid port in address {address!r}") from None
    else:
        port = default_port

    try:
        return validate_host(host), validate_port(port)
    except ConfigValidationError as e:
        raise ValueError(f"Invalid address {address!r}: {e}") from None


class QuerySession:
    """
    One status query against one server.

    Usage:
        with QuerySession() as session:
            session.connect("203.0.113.10:7778")
            response = session.receive_all()

        if response.success:
            print(response.server)
        else:
            print(f"Error: {response.error}")

    The session's ServerInfo is filled in as replies arrive. Each session owns
    its socket and ServerInfo, so several sessions may run on separate threads.
    A session runs a single exchange: it cannot be reconnected once closed and
    receive_all may only be called once.
    """

    def __init__(self, config: Optional[QueryConfig] = None):
        """
        Create a new query session.

        Args:
            config: Query settings (defaults to QueryConfig())

        Raises:
            ConfigValidationError: the configuration is invalid
        """
        self.config = (config or QueryConfig()).validate()
        self.server = ServerInfo()

        self._socket: Optional[socket.socket] = None
        self._target = ""
        self._cancel = threading.Event()
        self._closed = False
        self._exchanged = False

    @property
    def connected(self) -> bool:
        """Check if the UDP association is open."""
        return self._socket is not None

    def connect(self, address: str):
        """
        Open the UDP association and send the three queries.

        Args:
            address: "host:port" of the server's query port

        Raises:
            QueryConnectionError: the address is invalid, cannot be resolved,
                or the queries could not be sent
        """
        if self._closed:
            raise QueryError("Session is closed")
        if self._socket is not None:
            raise QueryError(f"Session is already connected to {self._target}")

        try:
            host, port = parse_address(address, self.config.default_port)
        except ValueError as e:
            raise QueryConnectionError(str(e)) from e

        self.server.address = host

        try:
            family, socktype, proto, _, sockaddr = socket.getaddrinfo(
                host, port, type=socket.SOCK_DGRAM)[0]
        except (OSError, IndexError) as e:
            raise QueryConnectionError(f"Failed to resolve {host}:{port}: {e}") from e

        try:
            sock = socket.socket(family, socktype, proto)
        except OSError as e:
            raise QueryConnectionError(f"Failed to create socket for {host}:{port}: {e}") from e

        try:
            sock.settimeout(self.config.timeout)
            sock.connect(sockaddr)
            for packet in REQUEST_PACKETS:
                sock.send(packet)
        except OSError as e:
            sock.close()
            raise QueryConnectionError(f"Failed to send queries to {host}:{port}: {e}") from e

        self._socket = sock
        self._target = f"{host}:{port}"
        logger.info(f"Sent status queries to {self._target}")

    def receive_all(self) -> QueryResponse:
        """
        Receive and decode the three replies.

        Replies may arrive in any order. An unrecognised or malformed datagram
        still uses up one of the three receives. The first timeout, socket
        error or cancellation ends the session with a failed response.

        Returns:
            QueryResponse wrapping this session's ServerInfo
        """
        if self._socket is None:
            raise QueryError("Session is not connected")
        if self._exchanged:
            raise QueryError("Session already ran its query; use a new session")
        self._exchanged = True

        response = QueryResponse(success=False, server=self.server)

        for _ in range(REPLY_COUNT):
            try:
                datagram = self._receive_datagram()
            except QueryCancelledError as e:
                response.cancelled = True
                response.error = self._failure_message(e, response)
                logger.info(f"Query of {self._target} cancelled")
                return response
            except (QueryError, OSError) as e:
                response.error = self._failure_message(e, response)
                logger.warning(f"Query of {self._target} failed: {response.error}")
                return response

            self._dispatch(datagram, response)

        response.success = True
        logger.info(f"Query of {self._target} finished "
                    f"({len(response.received)} replies, {response.ignored} ignored)")
        return response

    def start(self) -> Future:
        """
        Run receive_all on its own thread.

        Returns:
            Future resolved with the QueryResponse once the session is done
        """
        if self._socket is None:
            raise QueryError("Session is not connected")

        future = Future()

        def run():
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(self.receive_all())
            except Exception as e:
                future.set_exception(e)

        thread = threading.Thread(target=run, name=f"query-{self._target}", daemon=True)
        thread.start()
        return future

    def cancel(self):
        """Abort a waiting receive_all at its next poll."""
        self._cancel.set()

    def close(self):
        """Close the UDP association."""
        self._closed = True
        self._cancel.set()
        if self._socket:
            try:
                self._socket.close()
            finally:
                self._socket = None

    def _receive_datagram(self) -> bytes:
        """Wait for one datagram, polling so cancellation is noticed."""
        sock = self._socket
        deadline = time.monotonic() + self.config.timeout

        while True:
            if self._cancel.is_set():
                raise QueryCancelledError("Query cancelled")

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise QueryTimeoutError(f"No reply within {self.config.timeout:g}s")

            try:
                ready, _, _ = select.select([sock], [], [], min(self.config.poll_interval, remaining))
            except ValueError:
                # Socket closed underneath the wait
                raise QueryCancelledError("Session closed") from None
            if ready:
                break

        try:
            datagram = sock.recv(self.config.buffer_size)
        except OSError:
            # Closed from another thread between select and recv
            if self._cancel.is_set():
                raise QueryCancelledError("Session closed") from None
            raise
        if self.config.log_packets:
            logger.debug(f"Received {len(datagram)} bytes from {self._target}: {datagram.hex()}")
        return datagram

    def _dispatch(self, datagram: bytes, response: QueryResponse):
        """Decode a datagram and merge it into the ServerInfo."""
        try:
            decoded = decode_reply(datagram, self.config.encoding)
        except ProtocolError as e:
            response.ignored += 1
            logger.warning(f"Ignoring malformed reply from {self._target}: {e}")
            return

        if decoded is None:
            response.ignored += 1
            logger.warning(f"Ignoring unrecognized datagram ({len(datagram)} bytes) from {self._target}")
            return

        query_type, value = decoded
        if query_type == QueryType.SERVER_INFO:
            self.server.update(**value)
        elif query_type == QueryType.GAME_INFO:
            self.server.game_info.update(value)
        else:
            self.server.player_list.extend(value)

        response.received.append(query_type)

    @staticmethod
    def _failure_message(error: Exception, response: QueryResponse) -> str:
        count = len(response.received) + response.ignored
        return f"{error} ({count} of {REPLY_COUNT} replies received)"

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


# =============================================================================
# Convenience Functions
# =============================================================================

def query_server(address: str, config: Optional[QueryConfig] = None) -> QueryResponse:
    """
    Quick helper to query one server.

    Args:
        address: "host:port" of the server's query port
        config: Query settings

    Returns:
        QueryResponse; connection problems give a failed response instead of
        raising

    Usage:
        response = query_server("203.0.113.10:7778")
        if response.success:
            for player in response.server.player_list:
                print(f"{player.name}: {player.score}")
    """
    with QuerySession(config) as session:
        try:
            session.connect(address)
        except QueryConnectionError as e:
            logger.error(f"Query of {address} failed: {e}")
            return QueryResponse(success=False, server=session.server, error=str(e))
        return session.receive_all()


def query_servers(addresses: Iterable[str], config: Optional[QueryConfig] = None,
                  max_workers: int = 8) -> Dict[str, QueryResponse]:
    """
    Query several servers concurrently, one session per server.

    Returns:
        Dict of address -> QueryResponse, in the order addresses were given
    """
    addresses = list(dict.fromkeys(addresses))
    if not addresses:
        return {}

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(addresses))),
                            thread_name_prefix="pyutquery") as pool:
        futures = {address: pool.submit(query_server, address, config) for address in addresses}
        return {address: future.result() for address, future in futures.items()}
