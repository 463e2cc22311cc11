#!/usr/bin/env python3
"""
Example fixture module.

Snapshot the users alan and neil, with their settings, from a local MongoDB:

    python examples/users_fixtures.py get

Load them back into a fresh database:

    python examples/users_fixtures.py load

Or through the installed entry point:

    docfix get examples/users_fixtures.py --config docfix.yaml

Files are written next to this module as users.accounts.ejson and
users.settings.ejson.
"""

import sys

from docfix import Fixture, MongoCollection, Registry, load_config

db = load_config().mongo_db()

registry = Registry.for_module(__file__)

users = registry.register(Fixture(
    name="users",
    collections={
        "user_name": [
            MongoCollection(db.accounts),
            MongoCollection(db.settings),
        ],
    },
    keys=["alan", "neil"],
))


if __name__ == "__main__":
    sys.exit(registry.main())
