"""Frontend package - symbol catalog to per-symbol IR."""

from .catalog import Catalog, CatalogError, MissingAvailabilityError, YearMapping, load_catalog
from .localization import LocalizationOption, transform
from .names import SWIFT_KEYWORDS, derive_identifier, tokenize
