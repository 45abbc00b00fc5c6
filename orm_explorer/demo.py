"""
==============================================
ORM Explorer Demo
==============================================

Ties the four topics together: connects to MySQL, loads the fixture
file, runs the latest-users window query, and shows the structure
mapper copying fields between two unrelated records.

USAGE EXAMPLES:

1. Full demo loop:
    from orm_explorer.demo import ExplorerDemo

    with ExplorerDemo() as demo:
        summary = demo.run(iterations=10)

2. Single steps:
    with ExplorerDemo() as demo:
        doe = demo.show_fixture_user("User.doe")
        rows = demo.fetch_latest_users()

3. Mapping only (no database needed):
    product = ExplorerDemo().map_product_example()
"""

import time
from typing import List, Optional, Tuple

from orm_explorer.config import AppConfig, get_config
from orm_explorer.fixtures import Fixture
from orm_explorer.mapping import MappingReport, MismatchPolicy, StructMapper
from orm_explorer.models import DEMO_MODELS, ModelRegistry, Product, ProductPart, User, UserActivity
from orm_explorer.storage import MySQLClient, quote_ident

# One row per user id; created_at is exposed as updated_at
LATEST_USERS_QUERY = (
    "SELECT id, updated_at FROM ("
    "SELECT u1.id, u1.created_at AS updated_at, "
    "ROW_NUMBER() OVER (PARTITION BY u1.id) AS row_num "
    "FROM {table} AS u1 WHERE {condition}"
    ") sub WHERE row_num = 1"
)


class ExplorerDemo:
    """
    Demo runner around a MySQLClient, a ModelRegistry and a StructMapper.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        db: Optional[MySQLClient] = None,
        registry: Optional[ModelRegistry] = None,
    ):
        """
        Args:
            config: Optional configuration. If None, loads from environment.
            db: Optional database client. If None, built from config.mysql.
            registry: Optional model registry. If None, the demo models are registered.
        """
        self._config = config or get_config()
        mysql = self._config.mysql
        self._db = db or MySQLClient(mysql.host, mysql.port, mysql.user, mysql.password, mysql.database)
        if registry is None:
            registry = ModelRegistry()
            registry.register(*DEMO_MODELS)
        self._registry = registry
        self._mapper = StructMapper(self._config.mapper.mismatch_policy)

    @property
    def db(self) -> MySQLClient:
        return self._db

    @property
    def registry(self) -> ModelRegistry:
        return self._registry

    def load_fixtures(self) -> Fixture:
        """Load the configured fixture file into a fresh Fixture."""
        fixtures = self._config.fixtures
        fixture = Fixture(self._db, self._registry, truncate_tables=fixtures.truncate_tables)
        fixture.load(fixtures.directory, fixtures.filename)
        return fixture

    def show_fixture_user(self, name: str = "User.doe") -> User:
        """Load fixtures and print one named User row."""
        fixture = self.load_fixtures()
        user = fixture.must_row(name)
        print(f"👤 {name}: {user}")
        return user

    def fetch_latest_users(self) -> List[UserActivity]:
        """Load fixtures and return one UserActivity per user."""
        self.load_fixtures()
        users = self._registry.get(User)
        query = LATEST_USERS_QUERY.format(
            table=quote_ident(users.name),
            condition="u1.username IS NOT NULL",
        )
        return self._db.scan(query, None, UserActivity)

    def map_product(self, policy: Optional[MismatchPolicy] = None) -> Tuple[Product, MappingReport]:
        """
        Map ProductPart(id="Lock", correlation_number=123) onto an empty Product.

        Args:
            policy: Mismatch policy (None = config.mapper.mismatch_policy)

        Returns:
            The mapped Product and the MappingReport
        """
        mapper = self._mapper if policy is None else StructMapper(policy)
        part = ProductPart(id="Lock", correlation_number=123)
        product = Product()
        report = mapper.map(product, part)
        return product, report

    def map_product_example(self) -> Product:
        """Map a ProductPart onto an empty Product and print the result."""
        product, _ = self.map_product()
        print(f"Mapped product: {product}")
        return product

    def run(self, iterations: Optional[int] = None) -> dict:
        """
        Run the fixture + query round trip several times, then the mapping example.

        Args:
            iterations: Number of round trips (None = config.demo.iterations)

        Returns:
            Summary statistics
        """
        if iterations is None:
            iterations = self._config.demo.iterations
        if iterations < 0:
            raise ValueError(f"iterations must be >= 0, got {iterations}")

        print(f"🚀 Running {iterations} fixture/query round trip(s)")
        start_time = time.time()
        users_fetched = 0

        for i in range(iterations):
            self.show_fixture_user()
            users_fetched += len(self.fetch_latest_users())
            if (i + 1) % 10 == 0:
                print(f"   → {i + 1} round trips done...")

        product = self.map_product_example()
        elapsed = time.time() - start_time

        summary = {
            "iterations": iterations,
            "users_fetched": users_fetched,
            "elapsed_seconds": round(elapsed, 2),
            "product": product,
        }

        print(f"\n📊 Summary:")
        print(f"   → Round trips: {summary['iterations']}")
        print(f"   → Users fetched: {summary['users_fetched']}")
        print(f"   → Time elapsed: {summary['elapsed_seconds']}s")

        return summary

    def __enter__(self):
        self._db.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._db.disconnect()
