"""Catalogue bounded context: eyewear products and their categories.

The catalogue is read-mostly from the ordering side: carts and wishlists
only consult it for prices, stock and availability through the catalog port.
"""

from protean.domain import Domain

from catalogue.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging(log_dir="logs", log_file_prefix="eyewear")

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
catalogue = Domain(name="catalogue")
