"""
db/seed_data.py
---------------
Fixed sample rows used to populate an empty database.
"""

SAMPLE_ACCOMMODATIONS: list[dict] = [
    {
        "name": "Cozy Central Hostel",
        "description": "A safe and clean hostel in the heart of the city with 24/7 security "
                       "and female-only dorms available.",
        "city": "Bangalore",
        "address": "MG Road, Bangalore, Karnataka 560001",
        "latitude": 12.9716,
        "longitude": 77.5946,
        "price_per_night": 2500,
        "accommodation_type": "hostel",
        "amenities": ["Free WiFi", "24/7 Security", "Female Dorm", "Kitchen", "Common Area", "Laundry"],
        "photos": ["hostel1.jpg", "hostel2.jpg", "hostel3.jpg"],
        "contact_info": {"phone": "+91-80-12345678", "email": "info@cozyhostel.com"},
    },
    {
        "name": "Backpacker's Paradise",
        "description": "Budget-friendly hostel with great social atmosphere and co-working space.",
        "city": "Pune",
        "address": "Koregaon Park, Pune, Maharashtra 411001",
        "latitude": 18.5204,
        "longitude": 73.8567,
        "price_per_night": 1800,
        "accommodation_type": "hostel",
        "amenities": ["WiFi", "Common Area", "Laundry", "Cafe", "Bike Rental", "Co-working Space"],
        "photos": ["hostel4.jpg", "hostel5.jpg"],
        "contact_info": {"phone": "+91-20-87654321", "email": "hello@backpackersparadise.com"},
    },
    {
        "name": "Urban Nomad Hub",
        "description": "Modern co-living space for digital nomads with high-speed internet "
                       "and rooftop workspace.",
        "city": "Mumbai",
        "address": "Bandra West, Mumbai, Maharashtra 400050",
        "latitude": 19.0760,
        "longitude": 72.8777,
        "price_per_night": 3200,
        "accommodation_type": "hotel",
        "amenities": ["Co-working Space", "AC", "24/7 Security", "Rooftop", "High-speed WiFi", "Gym"],
        "photos": ["nomad1.jpg", "nomad2.jpg", "nomad3.jpg"],
        "contact_info": {"phone": "+91-22-11223344", "email": "stay@urbannomad.com"},
    },
    {
        "name": "Heritage Homestay",
        "description": "Traditional homestay with local family, perfect for cultural immersion.",
        "city": "Delhi",
        "address": "Karol Bagh, New Delhi, Delhi 110005",
        "latitude": 28.6139,
        "longitude": 77.2090,
        "price_per_night": 2200,
        "accommodation_type": "homestay",
        "amenities": ["Home-cooked Meals", "Cultural Tours", "WiFi", "AC", "Local Guide"],
        "photos": ["heritage1.jpg", "heritage2.jpg"],
        "contact_info": {"phone": "+91-11-99887766", "email": "family@heritagehomestay.com"},
    },
]

# Demo travelers for `python main.py seed-demo`; all share this password.
DEMO_PASSWORD = "password123"

DEMO_USERS: list[dict] = [
    {
        "email": "sweta.rajan@email.com",
        "full_name": "Sweta Rajan",
        "gender": "female",
        "age": 26,
        "interests": ["hiking", "photography", "local cuisine"],
    },
    {
        "email": "arjun.sharma@email.com",
        "full_name": "Arjun Sharma",
        "gender": "male",
        "age": 25,
        "interests": ["co-working", "tech meetups", "adventure sports"],
    },
    {
        "email": "priya.singh@email.com",
        "full_name": "Priya Singh",
        "gender": "female",
        "age": 28,
        "interests": ["yoga", "art galleries", "sustainable travel"],
    },
]

# (user index, accommodation index) refer to positions in the lists above
DEMO_REVIEWS: list[dict] = [
    {
        "user": 0, "accommodation": 0, "rating": 5, "safety_rating": 5,
        "review_text": "Excellent hostel! Felt very safe as a solo female traveler. "
                       "Staff was helpful and the female dorm was clean and secure.",
    },
    {
        "user": 2, "accommodation": 0, "rating": 4, "safety_rating": 5,
        "review_text": "Great location and very safe. 24/7 security made me feel "
                       "comfortable staying here alone.",
    },
    {
        "user": 1, "accommodation": 1, "rating": 4, "safety_rating": 4,
        "review_text": "Good co-working space and fast WiFi. Met some interesting fellow travelers here.",
    },
    {
        "user": 0, "accommodation": 2, "rating": 5, "safety_rating": 4,
        "review_text": "Premium location in Bandra. Slightly expensive but worth it for "
                       "the amenities and safety.",
    },
]

DEMO_CONNECTIONS: list[dict] = [
    {
        "user": 0, "accommodation": 0,
        "travel_dates": {"checkin": "2025-07-01", "checkout": "2025-07-03"},
        "message": "Looking for someone to explore Bangalore with! Love photography and local food.",
    },
    {
        "user": 1, "accommodation": 1,
        "travel_dates": {"checkin": "2025-07-05", "checkout": "2025-07-07"},
        "message": "Working remotely from Pune. Would love to meet fellow developers or entrepreneurs.",
    },
    {
        "user": 2, "accommodation": 2,
        "travel_dates": {"checkin": "2025-07-10", "checkout": "2025-07-12"},
        "message": "First time in Mumbai! Looking for travel buddies to explore the city safely.",
    },
]
