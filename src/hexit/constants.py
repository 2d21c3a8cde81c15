# constants.py
# The table of named constants that programs can refer to, such as IP_TCP or
# DNS_AAAA. Constants are either one or two bytes wide.


class Constant:
    """A constant value with a width of 8 or 16 bits."""

    def __init__(self, bits, value):
        self.bits = bits
        self.value = value

    def __eq__(self, other):
        return isinstance(other, Constant) and (self.bits, self.value) == (other.bits, other.value)

    def __hash__(self):
        return hash((self.bits, self.value))

    def __repr__(self):
        return f"Constant({self.bits}, {self.value})"


def eight(value):
    return Constant(8, value)


def sixteen(value):
    return Constant(16, value)


class UnknownConstantName(KeyError):
    def __init__(self, name):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f"Unknown constant ‘{self.name}’"


class Table:
    def __init__(self, entries=None):
        self.entries = dict(entries or {})

    @classmethod
    def empty(cls):
        return cls()

    @classmethod
    def builtin_set(cls):
        return cls(BUILTIN_CONSTANTS)

    def lookup(self, name):
        """Return the Constant with this name, raising UnknownConstantName if there is none."""
        try:
            return self.entries[name]
        except KeyError:
            raise UnknownConstantName(name) from None

    def all(self):
        """Yield (name, Constant) pairs in name order."""
        for name in sorted(self.entries):
            yield name, self.entries[name]

    def __len__(self):
        return len(self.entries)


BUILTIN_CONSTANTS = {
    # BGP message types
    # https://www.iana.org/assignments/bgp-parameters/bgp-parameters.xhtml
    'BGP_OPEN': eight(1),
    'BGP_UPDATE': eight(2),
    'BGP_NOTIFICATION': eight(3),
    'BGP_KEEPALIVE': eight(4),
    'BGP_ROUTE_REFRESH': eight(5),

    # DNS classes
    # https://www.iana.org/assignments/dns-parameters/dns-parameters.xhtml
    'DNS_IN': sixteen(1),
    'DNS_CH': sixteen(3),
    'DNS_HS': sixteen(4),

    # DNS record types
    'DNS_A': sixteen(1),
    'DNS_NS': sixteen(2),
    'DNS_CNAME': sixteen(5),
    'DNS_SOA': sixteen(6),
    'DNS_PTR': sixteen(12),
    'DNS_HINFO': sixteen(13),
    'DNS_MINFO': sixteen(14),
    'DNS_MX': sixteen(15),
    'DNS_TXT': sixteen(16),
    'DNS_GPOS': sixteen(27),
    'DNS_AAAA': sixteen(28),
    'DNS_LOC': sixteen(29),
    'DNS_SRV': sixteen(33),
    'DNS_NAPTR': sixteen(35),
    'DNS_OPT': sixteen(41),
    'DNS_SSHFP': sixteen(44),
    'DNS_IPSECKEY': sixteen(45),
    'DNS_TLSA': sixteen(52),
    'DNS_OPENPGPKEY': sixteen(61),
    'DNS_EUI48': sixteen(108),
    'DNS_EUI64': sixteen(109),
    'DNS_ANY': sixteen(255),
    'DNS_URI': sixteen(256),
    'DNS_CAA': sixteen(257),

    # EtherTypes
    # https://www.iana.org/assignments/ieee-802-numbers/ieee-802-numbers.xhtml
    'ETHERTYPE_IPV4': sixteen(0x0800),
    'ETHERTYPE_ARP': sixteen(0x0806),
    'ETHERTYPE_WAKE_ON_LAN': sixteen(0x0842),
    'ETHERTYPE_IPV6': sixteen(0x86DD),

    # Gzip compression methods and levels
    # http://www.gzip.org/format.txt
    'GZIP_DEFLATE': eight(0x08),
    'GZIP_SLOWEST': eight(0x02),
    'GZIP_FASTEST': eight(0x04),

    # Gzip flags
    'GZIP_FTEXT': eight(0x01),
    'GZIP_FHCRC': eight(0x02),
    'GZIP_FEXTRA': eight(0x04),
    'GZIP_FNAME': eight(0x08),
    'GZIP_FCOMMENT': eight(0x10),

    # Gzip operating systems
    'GZIP_FAT': eight(0),
    'GZIP_UNIX': eight(3),
    'GZIP_NT': eight(11),

    # ICMP message types
    # https://www.iana.org/assignments/icmp-parameters/icmp-parameters.xhtml
    'ICMP_ECHO_REPLY': eight(0),
    'ICMP_DESTINATION_UNREACHABLE': eight(2),
    'ICMP_REDIRECT': eight(5),
    'ICMP_ECHO': eight(8),
    'ICMP_ROUTER_ADVERTISEMENT': eight(9),
    'ICMP_ROUTER_SOLICITATION': eight(10),
    'ICMP_TIME_EXCEEDED': eight(11),
    'ICMP_PARAMETER_PROBLEM': eight(12),
    'ICMP_TIMESTAMP_REQUEST': eight(13),
    'ICMP_TIMESTAMP_REPLY': eight(14),
    'ICMP_ADDRESS_MASK_REQUEST': eight(17),
    'ICMP_ADDRESS_MASK_REPLY': eight(18),

    # IP protocols, as in /etc/protocols
    # https://www.iana.org/assignments/protocol-numbers/protocol-numbers.xhtml
    'IP_ICMP': eight(1),
    'IP_IGMP': eight(2),
    'IP_TCP': eight(6),
    'IP_UDP': eight(17),
    'IP_SCTP': eight(132),

    # TCP flags
    # https://www.iana.org/assignments/tcp-parameters/tcp-parameters.xhtml
    'TCP_FIN': sixteen(0x0001),
    'TCP_SYN': sixteen(0x0002),
    'TCP_RST': sixteen(0x0004),
    'TCP_PSH': sixteen(0x0008),
    'TCP_ACK': sixteen(0x0010),
    'TCP_URG': sixteen(0x0020),
    'TCP_ECN': sixteen(0x0040),
    'TCP_CWR': sixteen(0x0080),
}
