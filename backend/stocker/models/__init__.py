# Re-export Beanie documents
from .otp import OTPCode
from .user import User
