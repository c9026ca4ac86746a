"""keyconvert conversion modules."""

from ..modules.importer import ImportDispatcher
from ..modules.exporter import ExportDispatcher, ExportResult
from ..modules.certificate import CertificateIssuer, parse_name
from ..modules.address import AddressDeriver

__all__ = [
    "ImportDispatcher",
    "ExportDispatcher",
    "ExportResult",
    "CertificateIssuer",
    "parse_name",
    "AddressDeriver",
]
