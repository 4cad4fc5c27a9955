import os

# Set testing environment variable before the application settings load
os.environ["TESTING"] = "1"
