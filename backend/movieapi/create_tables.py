from movieapi.db import engine, Base
# Register every model on the metadata
from movieapi.models import *

def main():
    """Create all database tables"""
    Base.metadata.create_all(bind=engine)
    print("All tables created successfully.")

if __name__ == "__main__":
    main()
