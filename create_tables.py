from friendzone.database import Base, engine
from friendzone.models import (
    user,
    profile,
    post,
    comment,
    like,
    follow,
    friendship,
)

print("Creating database tables...")
Base.metadata.create_all(bind=engine)
print("✅ All tables created successfully!")
