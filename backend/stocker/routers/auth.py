from fastapi import APIRouter

from stocker.deps import CurrentEmail
from stocker.schemas import MeOut, MessageOut, OTPRequestIn, OTPVerifyIn, TokenOut
from stocker.services.auth_service import get_user_or_401, request_otp, verify_otp_and_login
from stocker.services.notification_service import bus

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/send-otp", response_model=MessageOut)
async def route_send_otp(payload: OTPRequestIn):
    """Email a fresh 6-digit code; also serves as "resend" (the previous code is replaced)."""
    await request_otp(payload.email)
    bus.notify("OTP sent", "Verification code sent")
    return MessageOut(message="OTP sent successfully")


@router.post("/verify-otp", response_model=TokenOut)
async def route_verify_otp(payload: OTPVerifyIn):
    """Check the code and return a session token.

    400 messages tell the client what to do next: "OTP has expired" means
    resend, "Invalid OTP" means re-enter.
    """
    token = await verify_otp_and_login(email=payload.email, otp=payload.otp)
    bus.notify("Verified", "Signed in")
    return TokenOut(message="OTP verified successfully", token=token)


@router.get("/me", response_model=MeOut)
async def route_me(email: str = CurrentEmail):
    """The verified user behind the bearer token."""
    user = await get_user_or_401(email)
    return MeOut.model_validate(user)
