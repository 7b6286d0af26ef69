from sqlalchemy.orm import declarative_base

# Base class for ORM models
Base = declarative_base()
