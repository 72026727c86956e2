"""Per-packet analyzers for layer-2 protocols, IP services and MAC/IP tracking."""