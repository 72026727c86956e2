"""Local network host inventory: frame decoding, protocol analyzers, PCAP analysis and reports."""

__version__ = "0.1.0"