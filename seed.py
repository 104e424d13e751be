from mailhq.database import SessionLocal, engine, Base
from mailhq.auth import get_password_hash
from mailhq.models import (
    Campaign,
    CampaignAnalytics,
    CampaignSubscriber,
    EmailTemplate,
    Setting,
    Subscriber,
    User,
)
from mailhq.models._helpers import utcnow

# Create tables
Base.metadata.create_all(bind=engine)

db = SessionLocal()

# Clear existing data
db.query(CampaignSubscriber).delete()
db.query(CampaignAnalytics).delete()
db.query(Campaign).delete()
db.query(EmailTemplate).delete()
db.query(Subscriber).delete()
db.query(Setting).delete()
db.query(User).delete()

admin = User(
    email="admin@example.com",
    hashed_password=get_password_hash("changeme123"),
    display_name="Admin",
)

subscribers = [
    Subscriber(email="ada@example.com", first_name="Ada", status="active", lists=["newsletter", "product"]),
    Subscriber(email="grace@example.com", first_name="Grace", status="active", lists=["newsletter"]),
    Subscriber(email="linus@example.com", first_name="Linus", status="active", lists=["product"]),
    Subscriber(email="ken@example.com", first_name="Ken", status="unsubscribed", lists=["newsletter"]),
    Subscriber(email="barbara@example.com", first_name="Barbara", status="bounced", lists=[]),
]

welcome = EmailTemplate(
    name="Welcome",
    subject="Welcome aboard",
    html_content="<h1>Welcome!</h1><p>Thanks for subscribing.</p>",
    text_content="Welcome! Thanks for subscribing.",
)

db.add(admin)
db.add_all(subscribers)
db.add(welcome)
db.flush()

campaigns = [
    Campaign(
        name="October Newsletter", subject="What's new in October",
        from_name="MailHQ", from_email="news@example.com",
        template_id=welcome.id, lists=["newsletter"], status="sent", sent_at=utcnow(),
    ),
    Campaign(
        name="Product Launch", subject="Meet the new release",
        from_name="MailHQ", from_email="launch@example.com",
        lists=["product"], status="draft",
    ),
]
db.add_all(campaigns)
db.flush()

db.add_all([
    CampaignAnalytics(
        campaign_id=campaigns[0].id, sent=1000, delivered=992, bounced=5,
        complained=1, unsubscribed=2, total_subscribers=1000,
    ),
    CampaignAnalytics(campaign_id=campaigns[1].id),
])

db.add_all([
    Setting(key="smtp", value={
        "host": "smtp.example.com", "port": "587", "username": "", "password": "", "secure": True,
    }),
    Setting(key="sender", value={
        "defaultFromName": "MailHQ", "defaultFromEmail": "news@example.com", "defaultReplyTo": "",
    }),
])

db.commit()

print("Database seeded successfully!")
print(f"  - {len(subscribers)} subscribers")
print(f"  - 1 template, {len(campaigns)} campaigns")
print("  - operator admin@example.com / changeme123")

db.close()
