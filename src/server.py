"""Protean Engine runner for the eyewear store domains.

Only needed when the production overlay switches event processing to
async: the Engine then delivers domain events (order emails and the like)
to their handlers outside the request cycle.

Usage:
    python src/server.py                     # Run both domain engines
    python src/server.py --domain ordering   # Run only the ordering engine
    python src/server.py --domain catalogue  # Run only the catalogue engine
"""

import argparse
import asyncio

from protean.server.engine import Engine

DOMAIN_NAMES = ["catalogue", "ordering"]


def _get_domain(name):
    """Import and initialize a domain by name."""
    if name == "catalogue":
        from catalogue.domain import catalogue

        catalogue.init()
        return catalogue
    elif name == "ordering":
        from ordering.domain import ordering

        ordering.init()
        return ordering
    else:
        raise ValueError(f"Unknown domain: {name}")


async def run(domain_names):
    engines = [Engine(_get_domain(name)) for name in domain_names]
    await asyncio.gather(*(engine.run() for engine in engines))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Eyewear store Engine runner")
    parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        help="Run a single domain engine (default: run all)",
    )
    args = parser.parse_args(argv)

    domain_names = [args.domain] if args.domain else DOMAIN_NAMES

    asyncio.run(run(domain_names))


if __name__ == "__main__":
    main()
