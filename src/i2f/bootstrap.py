# src/i2f/bootstrap.py
from dotenv import load_dotenv


def initialize_environment():
    """
    Load a .env file (if any) so I2F_* variables reach load_config().
    Variables already set in the environment win.
    """
    load_dotenv(override=False)
