"""
TLD Registry - well-known WHOIS servers per TLD.

TLDs missing from this registry are resolved at lookup time through
IANA's WHOIS server (see whois_client.IANA_WHOIS_SERVER).
"""

from types import MappingProxyType
from typing import Mapping

# ============================================================================
# GENERIC TLDs (gTLDs)
# ============================================================================
GENERIC_TLDS = {
    "com": "whois.verisign-grs.com",
    "net": "whois.verisign-grs.com",
    "org": "whois.pir.org",
    "info": "whois.afilias.net",
    "biz": "whois.nic.biz",
    "name": "whois.nic.name",
}

# ============================================================================
# NEW gTLDs - Tech, startup & finance
# ============================================================================
NEW_GENERIC_TLDS = {
    "io": "whois.nic.io",
    "co": "whois.nic.co",
    "ai": "whois.nic.ai",
    "app": "whois.nic.google",
    "dev": "whois.nic.google",
    "xyz": "whois.nic.xyz",
    "tech": "whois.centralnic.com",
    "online": "whois.centralnic.com",
    "store": "whois.centralnic.com",
    "shop": "whois.nic.shop",
    "digital": "whois.donuts.co",
    "finance": "whois.donuts.co",
    "capital": "whois.donuts.co",
    "trade": "whois.nic.trade",
}

# ============================================================================
# EUROPEAN ccTLDs
# ============================================================================
EUROPE_TLDS = {
    "de": "whois.denic.de",
    "eu": "whois.eu",
    "fr": "whois.nic.fr",
    "it": "whois.nic.it",
    "es": "whois.nic.es",
    "nl": "whois.sidn.nl",
    "uk": "whois.nic.uk",
    "at": "whois.nic.at",
    "ch": "whois.nic.ch",
    "be": "whois.dns.be",
}

DEFAULT_WHOIS_SERVERS: Mapping[str, str] = MappingProxyType({
    **GENERIC_TLDS,
    **NEW_GENERIC_TLDS,
    **EUROPE_TLDS,
})
