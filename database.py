# database.py - MongoDB connection and the application database context
import pymongo
from pymongo import MongoClient

from config import CONNECT_TIMEOUT_SECONDS
from errors import DatabaseConnectionError
from schema import ALL_COLLECTIONS, PANTRY_CATEGORIES, CATEGORY_TYPE_PREDEFINED


class AppContext:
    """Database handle and auth secret produced by the bootstrap.

    Built once at process start and passed explicitly to every consumer
    (Flask app, token signer, scripts). Safe to share between threads
    once bootstrap has finished.
    """

    def __init__(self, client, db, secret, db_name=None):
        self.client = client
        self.db = db
        self.secret = secret
        self.db_name = db_name or getattr(db, 'name', None)
        self.bootstrap_results = []

    def is_connected(self):
        """Check if database is reachable"""
        if not self.client:
            return False
        try:
            self.client.admin.command('ping')
            return True
        except Exception:
            return False

    def close(self):
        if self.client:
            self.client.close()


def _explain_connection_error(error):
    message = str(error).lower()
    if "authentication failed" in message:
        print("🔐 Authentication issue - check username/password in MongoDB URI")
    elif "timeout" in message or "timed out" in message:
        print("⏰ Connection timeout - check network/firewall settings")
    elif "dns" in message:
        print("📡 DNS resolution issue - check MongoDB cluster hostname")


def connect(settings, client_factory=MongoClient):
    """Connect to MongoDB and verify liveness with a ping.

    Raises DatabaseConnectionError if the client cannot be created or the
    ping does not succeed within CONNECT_TIMEOUT_SECONDS.
    """
    timeout_ms = CONNECT_TIMEOUT_SECONDS * 1000
    print(f"🔗 Connecting to: {settings.masked_uri()}")

    try:
        client = client_factory(
            settings.mongodb_uri,
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
            socketTimeoutMS=timeout_ms,
            retryWrites=True
        )
    except Exception as e:
        print(f"❌ MongoDB connection failed: {e}")
        print(f"🔍 Error type: {type(e).__name__}")
        _explain_connection_error(e)
        raise DatabaseConnectionError(f"Failed to connect to MongoDB: {e}") from e

    print("🔄 Testing MongoDB connection...")
    try:
        with pymongo.timeout(CONNECT_TIMEOUT_SECONDS):
            client.admin.command('ping')
    except Exception as e:
        print(f"❌ MongoDB ping failed: {e}")
        print(f"🔍 Error type: {type(e).__name__}")
        _explain_connection_error(e)
        client.close()
        raise DatabaseConnectionError(f"Failed to ping MongoDB: {e}") from e

    db = client[settings.db_name]
    print(f"✅ Connected to MongoDB database: {settings.db_name}")
    return AppContext(client, db, settings.jwt_secret, settings.db_name)


def collection_exists(db, name):
    """Return True if the collection is already present in the catalog"""
    try:
        return len(db.list_collection_names(filter={"name": name})) > 0
    except Exception as e:
        print(f"⚠️ Could not list collections while probing '{name}': {e}")
        return False


def get_stats(ctx):
    """Get per-collection document counts"""
    if not ctx or ctx.db is None:
        return {"error": "Database not connected", "connected": False}

    try:
        stats = {"connected": True, "database": ctx.db_name, "collections": {}}
        for name in ALL_COLLECTIONS:
            stats["collections"][name] = ctx.db[name].count_documents({})
        stats["predefined_categories"] = ctx.db[PANTRY_CATEGORIES].count_documents(
            {"type": CATEGORY_TYPE_PREDEFINED}
        )
        return stats
    except Exception as e:
        print(f"⚠️ Stats error: {e}")
        return {"error": str(e), "connected": False}
