"""
Contact Management App

Handles the portfolio contact form:
- Public submission with rate limiting
- Admin triage (status, priority, notes)
- Replies by email and spam flagging
- Owner notification emails
"""
