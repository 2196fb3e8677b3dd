import logging

from streamhub.db import engine, Base
# Tüm modelleri tek seferde import et
from streamhub import models  # noqa: F401

logger = logging.getLogger(__name__)

def main():
    """Create all database tables"""
    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine)
    logger.info(f"Created tables: {', '.join(sorted(Base.metadata.tables))}")

if __name__ == "__main__":
    main()
