"""Resolver configuration manager.

This package owns the host's resolv.conf.  DNS settings arrive from several
independent sources (a VPN connection, the best network device and any number
of secondary zones) and are merged into a single resolver configuration:

* :class:`~named_manager.config.ConfigRecord` holds the nameservers, domains
  and search domains of one source;
* :mod:`named_manager.merge` combines the active records in a fixed order
  (VPN, best device, everything else by registration);
* :class:`~named_manager.resolv.ResolvConfRenderer` turns the composite into
  resolv.conf text; and
* :class:`~named_manager.publisher.ResolvConfPublisher` installs the text via
  a temporary file and an atomic rename.

:class:`~named_manager.manager.NamedManager` ties these together and is the
only entry point callers normally need.
"""

from .config import CompositeConfig, ConfigRecord, ConfigRole  # noqa: F401
from .manager import NamedManager  # noqa: F401
from .publisher import PublishResult, ResolvConfPublisher  # noqa: F401

__all__ = [
    "CompositeConfig",
    "ConfigRecord",
    "ConfigRole",
    "NamedManager",
    "PublishResult",
    "ResolvConfPublisher",
]
