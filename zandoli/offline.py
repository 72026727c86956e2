"""Reading pcap capture files and feeding their frames to the analyzers."""

from __future__ import annotations

import logging
import struct
import time
from pathlib import Path
from typing import Any, BinaryIO, Iterator, Optional

from .dispatcher import Dispatcher
from .packet import Packet, decode

log = logging.getLogger("zandoli.offline")

LINKTYPE_ETHERNET = 1
MIN_SNAPLEN = 200

_MAGICS = {
    b"\xd4\xc3\xb2\xa1": "<",
    b"\xa1\xb2\xc3\xd4": ">",
    b"\x4d\x3c\xb2\xa1": "<",
    b"\xa1\xb2\x3c\x4d": ">",
}


class PcapReader:
    """Reader for classic pcap files (micro- or nanosecond, either byte order)."""

    def __init__(self, path: str | Path):
        self.path = str(path)
        self._file: Optional[BinaryIO] = open(path, "rb")
        try:
            header = self._file.read(24)
            if len(header) < 24:
                raise ValueError(f"{self.path}: truncated pcap header")
            endian = _MAGICS.get(header[:4])
            if endian is None:
                raise ValueError(f"{self.path}: not a pcap file")
            major, minor, _, _, snaplen, network = struct.unpack(endian + "HHiIII", header[4:])
        except BaseException:
            self.close()
            raise
        self._endian = endian
        self.version = (major, minor)
        self.snaplen = snaplen
        self.link_type = network & 0xFFFF

    def packets(self) -> Iterator[Packet]:
        """Yield each recorded frame, decoded when the link type is Ethernet."""
        if self._file is None:
            raise ValueError("pcap reader is closed")
        record = struct.Struct(self._endian + "IIII")
        while True:
            header = self._file.read(record.size)
            if not header:
                return
            if len(header) < record.size:
                log.warning("Truncated record header in %s", self.path)
                return
            _, _, incl_len, _ = record.unpack(header)
            data = self._file.read(incl_len)
            if len(data) < incl_len:
                log.warning("Truncated packet data in %s", self.path)
                return
            yield decode(data) if self.link_type == LINKTYPE_ETHERNET else Packet(data=data)

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "PcapReader":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


def _dispatch_all(reader: PcapReader, dispatcher: Dispatcher) -> int:
    count = 0
    for packet in reader.packets():
        dispatcher.handle_packet(packet)
        count += 1
    return count


def analyze_pcap_with_diagnostics(path: str | Path, dispatcher: Dispatcher) -> int:
    """Analyze a pcap file, warning about a small snaplen; return the frame count."""
    with PcapReader(path) as reader:
        log.info("Starting offline analysis on %s", path)
        log.debug("PCAP snaplen: %d bytes", reader.snaplen)
        if reader.snaplen < MIN_SNAPLEN:
            log.warning(
                "PCAP file was likely captured with a too-small snaplen (%d). "
                "Some protocols may not be detected correctly.", reader.snaplen,
            )
        start = time.monotonic()
        count = _dispatch_all(reader, dispatcher)
    log.info("PCAP analysis completed in %.3fs", time.monotonic() - start)
    return count


def analyze_pcap(path: str | Path, dispatcher: Dispatcher) -> int:
    """Pass every frame of a pcap file to the dispatcher; return the frame count."""
    with PcapReader(path) as reader:
        log.info("Starting offline analysis on %s", path)
        start = time.monotonic()
        count = _dispatch_all(reader, dispatcher)
    log.info("PCAP analysis completed in %.3fs", time.monotonic() - start)
    return count