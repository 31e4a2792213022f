"""In-memory data store for users, businesses, and messages.

State lives for the lifetime of the process. Identifiers are assigned per
entity kind from counters starting at 1, so ``0`` stays free for the assistant.
"""

import logging
from itertools import count

from src.core.schemas import (
    Business,
    BusinessCreate,
    IndustryRules,
    Message,
    MessageCreate,
    User,
    UserCreate,
)

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when a store operation cannot be applied."""


_SAMPLE_BUSINESSES: list[tuple[UserCreate, BusinessCreate]] = [
    (
        UserCreate(
            username="techhub", password="password123", type="business",
            name="TechHub Solutions",
        ),
        BusinessCreate(
            description=(
                "Expert IT consulting and software development services. "
                "Specializing in web applications, mobile apps, and cloud solutions."
            ),
            category="Technology",
            location="New York, NY",
            services=["Web Development", "Mobile Apps", "Cloud Computing", "IT Consulting"],
            industry_rules=IndustryRules(
                keywords=["software", "web", "mobile", "cloud", "IT", "digital", "tech",
                          "application"],
                priority=8,
                requirements=["Software Development", "Cloud Architecture",
                              "Agile Methodology"],
                specializations=["Web Applications", "Mobile Development", "Cloud Solutions"],
            ),
        ),
    ),
    (
        UserCreate(
            username="homefix", password="password123", type="business",
            name="HomeFix Pro",
        ),
        BusinessCreate(
            description=(
                "Professional home repair and maintenance services. "
                "From basic repairs to major renovations, we do it all."
            ),
            category="Home Services",
            location="New York, NY",
            services=["Home Repairs", "Renovation", "Plumbing", "Electrical", "HVAC"],
            industry_rules=IndustryRules(
                keywords=["repair", "renovation", "maintenance", "install", "fix", "home",
                          "house", "building"],
                priority=9,
                requirements=["Licensed Contractor", "HVAC Certified", "Electrical License"],
                specializations=["Home Renovation", "HVAC Systems", "Electrical Work",
                                 "Plumbing"],
            ),
        ),
    ),
    (
        UserCreate(
            username="healthplus", password="password123", type="business",
            name="HealthPlus Services",
        ),
        BusinessCreate(
            description=(
                "Comprehensive healthcare services including preventive care, "
                "wellness programs, and specialized treatments."
            ),
            category="Healthcare",
            location="New York, NY",
            services=["Primary Care", "Wellness Programs", "Specialized Care", "Telemedicine"],
            industry_rules=IndustryRules(
                keywords=["health", "medical", "wellness", "care", "treatment", "therapy",
                          "diagnosis"],
                priority=7,
                requirements=["Medical License", "Board Certification", "HIPAA Compliance"],
                specializations=["Primary Care", "Preventive Medicine", "Telemedicine"],
            ),
        ),
    ),
]


class MemoryStore:
    """Process-local store. Construct once and share through the app.

    Usage::

        store = MemoryStore()
        store.seed()
        user = store.create_user(UserCreate(...))
    """

    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._businesses: dict[int, Business] = {}
        self._messages: list[Message] = []
        self._user_ids = count(1)
        self._business_ids = count(1)
        self._message_ids = count(1)
        self._seeded = False

    # -- users -------------------------------------------------------------

    def get_user(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    def list_users(self) -> list[User]:
        return list(self._users.values())

    def create_user(self, data: UserCreate) -> User:
        """Store a new user. Usernames are unique."""
        if self.get_user_by_username(data.username) is not None:
            msg = f"username '{data.username}' is already taken"
            raise StoreError(msg)
        user = User(id=next(self._user_ids), **dict(data))
        self._users[user.id] = user
        return user

    # -- businesses --------------------------------------------------------

    def get_business(self, business_id: int) -> Business | None:
        return self._businesses.get(business_id)

    def get_business_by_user_id(self, user_id: int) -> Business | None:
        return next((b for b in self._businesses.values() if b.user_id == user_id), None)

    def list_businesses(self) -> list[Business]:
        return list(self._businesses.values())

    def create_business(self, user_id: int, data: BusinessCreate) -> Business:
        """Attach a business profile to an existing user."""
        if user_id not in self._users:
            msg = f"user {user_id} does not exist"
            raise StoreError(msg)
        business = Business(id=next(self._business_ids), user_id=user_id, **dict(data))
        self._businesses[business.id] = business
        return business

    def search_businesses(self, query: str) -> list[Business]:
        """Return every business; relevance filtering happens in the matcher."""
        logger.debug("Searching businesses with query: %r", query)
        return self.list_businesses()

    # -- messages ----------------------------------------------------------

    def get_messages(self, user_a: int, user_b: int) -> list[Message]:
        """Return the conversation between two users in creation order."""
        return [
            m for m in self._messages
            if (m.from_id == user_a and m.to_id == user_b)
            or (m.from_id == user_b and m.to_id == user_a)
        ]

    def create_message(self, data: MessageCreate) -> Message:
        message = Message(id=next(self._message_ids), **dict(data))
        self._messages.append(message)
        return message

    # -- sample data -------------------------------------------------------

    def seed(self) -> None:
        """Insert the sample business accounts. Call once at startup."""
        if self._seeded:
            msg = "sample data has already been seeded"
            raise StoreError(msg)
        for user_data, business_data in _SAMPLE_BUSINESSES:
            user = self.create_user(user_data)
            self.create_business(user.id, business_data)
            logger.info("Seeded sample business '%s' (user %d)", user.name, user.id)
        self._seeded = True
