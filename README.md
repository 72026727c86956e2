# zandoli

zandoli builds an inventory of the hosts on a local network segment from
the frames they send. It decodes Ethernet frames, runs a chain of protocol
analyzers over them (802.1X/EAPOL, LLDP, CDP, STP, DHCP, DNS, mDNS, LLMNR,
NetBIOS, SMB), classifies every host by vendor and by the protocols it was
seen speaking, flags MAC/IP anomalies, and writes the result as JSON, CSV
and HTML reports or as a table on the terminal.

## Installation

```
pip install .
```

## Quick start: analysing a capture file

```python
from zandoli.analyzers.meta import MACIPTracker
from zandoli.dispatcher import Dispatcher, default_analyzers
from zandoli.export import export_all
from zandoli.hosts import HostRegistry
from zandoli.offline import analyze_pcap
from zandoli.security import TopologyProtocols
from zandoli.ui import display_summary

registry = HostRegistry()
topology = TopologyProtocols()
dispatcher = Dispatcher(default_analyzers(registry, topology, MACIPTracker()))

frames = analyze_pcap("capture.pcap", dispatcher)
print(frames, "frames;", "LLDP seen" if topology.lldp else "no LLDP")

paths = export_all(registry, "results", "eth0", 0)
display_summary(registry)
```

## What is in the package

### Configuration – `zandoli.config`

- `load_config(path)` reads a YAML file into a `Config` (with `ScanConfig`
  and `StealthConfig` parts). A missing or unreadable file, bad YAML or a
  wrongly typed value raises `ConfigError`.
- Missing stealth values fall back to 3 requests per second, 10 per burst
  and a 25 second burst window (`DEFAULT_STEALTH`). Durations are held in
  seconds and may be written as numbers or as strings such as `"1m30s"` or
  `"200ms"`.
- `load_exclusions(path)` reads one IP address or CIDR block per line and
  returns an `ExclusionList`; `ExclusionList.is_excluded(ip)` tests an
  address against it. An invalid line raises `ConfigError`.

```yaml
iface: eth0
passive_duration: 30
output_dir: results
log_file: zandoli.log
log_level: info          # debug | info | warn | error | fatal
scan:
  mode: combined
  active_type: standard
stealth_scan:
  max_requests_per_second: 3
  max_requests_per_burst: 10
  burst_interval_seconds: 25
```

### Logging – `zandoli.logger`

`init_logger(level, log_file)` configures the `zandoli` logger to write to
standard output and, when `log_file` is given, to append to that file. If
the file cannot be opened a notice is printed and only the console is used.
Unknown levels mean `info`.

### Vendors and OUI lists – `zandoli.oui`

- `OUIDatabase.load_vendors(path)` reads `OUI<TAB>vendor` lines, for
  example `02:00:00	Example Vendor`.
- `OUIDatabase.load_oui_lists(defensive_path, blacklist_path)` reads one
  OUI per line into defensive and blacklisted labels;
  `is_filtered(mac)` and `get_label(mac)` query them.
- `get_vendor(mac)` returns the vendor name or `"Unknown"`.
- `guess_category(vendor)` maps a vendor name to `workstation`, `printer`,
  `network`, `iot`, `virtual`, `firewall`, `access_point`, `camera`,
  `storage` or `unknown`.

Blank lines and lines starting with `#` are ignored in every list file.

### Frames – `zandoli.packet`

`decode(data)` turns raw Ethernet bytes into a `Packet` with whatever layers
it could decode (`Ethernet`, LLC flag, `ARP`, source and destination IP,
`Transport` for UDP/TCP, `DNSMessage`); it never raises.
`build_arp_request(src_mac, src_ip, target_ip)` builds a broadcast ARP
who-has frame. `parse_dns`, `format_mac` and `parse_mac` are available on
their own; malformed input raises `PacketError`.

### Hosts – `zandoli.hosts`

`HostRegistry` holds the discovered `Host` objects and the private /24
networks seen. It finds hosts by IP or MAC, creates them on demand
(`get_or_create_by_mac`, `get_or_create_by_ip`), attaches names
(`update_dns`) and records networks (`register_ip`). `new_host(ip, mac,
method, oui_db)` creates a host with its vendor filled in, and
`classify_host(host)` sets its category from the protocols it used
(SMB/NetBIOS → server, DHCP/mDNS/LLMNR → workstation, CDP/LLDP/STP →
network, otherwise by vendor). `is_private_ip(ip)` tests for RFC 1918
addresses.

### Analyzers and dispatch

- `zandoli.analyzers.layer2`: `analyze_8021x`, `analyze_cdp`,
  `analyze_lldp`, `analyze_stp`.
- `zandoli.analyzers.services`: `analyze_dhcp`, `analyze_dns`,
  `analyze_llmnr`, `analyze_mdns`, `analyze_netbios`, `analyze_smb`, and
  `decode_netbios_name`.
- `zandoli.analyzers.meta.MACIPTracker` remembers every IP each source MAC
  has used.
- `zandoli.security`: `TopologyProtocols` records whether LLDP, CDP or STP
  was seen; `AnomalyTracker` reports MACs with several IPs and IPs with
  several MACs into a `SecuritySummary`.
- `zandoli.dispatcher`: `default_analyzers(registry, topology,
  meta_tracker)` returns the standard chain, and
  `Dispatcher.handle_packet(packet)` runs each analyzer in order; an
  analyzer that raises does not stop the rest, and the number of failures
  is returned.

### Capture files – `zandoli.offline`

`PcapReader` reads classic pcap files (micro- or nanosecond timestamps,
either byte order) and yields decoded packets for Ethernet captures.
`analyze_pcap(path, dispatcher)` feeds every frame to a dispatcher and
returns the frame count; `analyze_pcap_with_diagnostics` does the same and
also warns when the capture's snaplen is below 200 bytes. The pcapng format
is not read.

### Reports – `zandoli.export` and `zandoli.ui`

`export_all(hosts, output_dir, iface, duration)` writes
`Results_YYYY-MM-DDTHH-MM-SS.json`, `.csv` and `.html` into an existing
directory and returns the three paths. The JSON file holds scan metadata,
host counts and the hosts split by detection method (`passive` or
`active`); the CSV and HTML files list every host.

`display_summary(hosts)` prints passive and active hosts as tables with
totals; `format_hosts_table`, `filter_hosts_by_method`, `truncate` and
`format_protocols` are the pieces it is built from.

### Interfaces and address ranges – `zandoli.utils`

`get_interface_info(name)` and `get_local_subnet(ip, name)` look up an
interface's IPv4 address, MAC and network (raising `LookupError` when they
cannot be found). `ips_in_subnet(subnet, exclude)` yields a subnet's
addresses in order, and `inc_ip`, `bytes_to_utf16` and `decode_utf16` are
small helpers.

## What the package does not do

zandoli is a library only. It installs no command-line program, does not
capture live traffic from a network interface and does not send ARP probes
or run active or stealth scans. Frames must come from a pcap file or be
handed to `decode` and the dispatcher by the caller; `build_arp_request`
only builds the bytes of a request.

## Tests

```
pip install .[test]
pytest
```