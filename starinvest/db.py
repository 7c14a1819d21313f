from pymongo import MongoClient, ASCENDING, IndexModel
import certifi

from starinvest.config import MONGO_URI, MONGO_DB_NAME, MONGO_TLS, MONGO_TIMEOUT_MS

# MongoClient connects lazily, so importing this module never blocks
if MONGO_TLS:
    client = MongoClient(MONGO_URI, tlsCAFile=certifi.where(), serverSelectionTimeoutMS=MONGO_TIMEOUT_MS)
else:
    client = MongoClient(MONGO_URI, serverSelectionTimeoutMS=MONGO_TIMEOUT_MS)
db = client[MONGO_DB_NAME]

users_collection = db["users"]
transactions_collection = db["transactions"]


def ensure_indexes(users, transactions):
    """Create the unique indexes the stores rely on for atomic writes."""
    users.create_indexes([
        IndexModel([("id", ASCENDING)], unique=True),
        IndexModel([("phone", ASCENDING)], unique=True),
        IndexModel([("email", ASCENDING)], unique=True),
        # Sparse: verified users carry no token
        IndexModel([("verificationToken", ASCENDING)], sparse=True),
    ])
    transactions.create_indexes([
        IndexModel([("id", ASCENDING)], unique=True),
        IndexModel([("reference", ASCENDING)], unique=True),
        IndexModel([("phone", ASCENDING), ("createdAt", -1)]),
    ])

