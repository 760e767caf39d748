import motor.motor_asyncio
from pymongo import ASCENDING, DESCENDING

from resume_optimizer.models.settings import get_settings
from resume_optimizer.utils.logging_config import get_logger

logger = get_logger(__name__)

settings = get_settings()

logger.info(f"Initializing MongoDB connection to database: {settings.db_name}")

# Initialize client; motor connects lazily on first operation
try:
    client = motor.motor_asyncio.AsyncIOMotorClient(settings.mongo_details)
    db = client[settings.db_name]
    logger.info("MongoDB client initialized successfully")
except Exception as e:
    logger.error(f"Failed to initialize MongoDB client: {e}")
    raise

# Collections
jobs_coll = db["jobs"]
resumes_coll = db["resumes"]
analyses_coll = db["analyses"]
optimized_coll = db["optimized_resumes"]
profiles_coll = db["profiles"]

# (collection, index keys, unique)
INDEXES = [
    (jobs_coll, [("user_id", ASCENDING), ("job_id", ASCENDING)], True),
    (resumes_coll, [("user_id", ASCENDING), ("resume_id", ASCENDING)], True),
    (analyses_coll, [("user_id", ASCENDING), ("analysis_id", ASCENDING)], True),
    (optimized_coll, [("user_id", ASCENDING), ("optimized_id", ASCENDING)], True),
    (profiles_coll, [("user_id", ASCENDING)], True),
    (jobs_coll, [("user_id", ASCENDING), ("created_at", DESCENDING)], False),
    (analyses_coll, [("job_id", ASCENDING)], False),
]


async def init_indexes():
    """Index initialization for collections."""
    logger.info("Starting database index initialization")

    for coll, keys, unique in INDEXES:
        label = f"{coll.name}.({', '.join(k for k, _ in keys)})"
        try:
            await coll.create_index(keys, unique=unique)
            logger.debug(f"Created {'unique ' if unique else ''}index on {label}")
        except Exception as e:
            if "already exists" in str(e).lower():
                logger.debug(f"Index on {label} already exists")
            else:
                logger.warning(f"Could not create index on {label}: {e}")

    logger.info("Database index initialization completed")
