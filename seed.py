import secrets
import uuid
from datetime import datetime, timedelta

from database.connection import SessionLocal, engine, Base
from models.admin_user import AdminUser
from models.event import Event
from models.event_host import EventHost
from models.qr_claim import QrClaim
from models.qr_roll import QrRoll


def seed_database(codes: int = 20):
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        if db.query(AdminUser).filter(AdminUser.username == "admin").first():
            print("Database already seeded")
            return

        admin = AdminUser(username="admin", password_hash=AdminUser.hash_password("admin123"))
        db.add(admin)

        start = datetime.utcnow()
        event = Event(
            fancy_id="demo-event-2024",
            name="Demo Event",
            from_admin=False,
            start_date=start,
            end_date=start + timedelta(days=1)
        )
        db.add(event)

        host = EventHost(passphrase=secrets.token_urlsafe(12))
        db.add(host)
        db.commit()
        db.refresh(event)
        db.refresh(host)

        roll = QrRoll(event_host_id=host.id)
        db.add(roll)
        db.commit()
        db.refresh(roll)

        for numeric_id in range(1, codes + 1):
            db.add(QrClaim(
                qr_hash=uuid.uuid4().hex[:6],
                numeric_id=numeric_id,
                qr_roll_id=roll.id,
                event_id=event.id
            ))
        db.commit()

        print("Admin: admin / admin123")
        print(f"Event: {event.fancy_id} (ID: {event.id})")
        print(f"Host passphrase: {host.passphrase}")
        print(f"{codes} QR codes created in roll {roll.id}")

    except Exception as e:
        print(f"Seed failed: {e}")
        db.rollback()
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
