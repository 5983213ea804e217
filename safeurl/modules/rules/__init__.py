# Safety Rules Package
from .base import SafetyRule, parse_absolute, parse_host
from .https import HttpsRule
from .tld import SuspiciousTldRule
from .length import UrlLengthRule
from .domain import SuspiciousDomainRule
from .threat_list import ThreatListRule


def default_rules():
    """Built-in rules in registration order. Order drives finding order."""
    return [HttpsRule(), SuspiciousTldRule(), UrlLengthRule(), SuspiciousDomainRule()]
