"""HookRelay: forward GitHub and Twilio webhooks to Discord and SMS."""

__version__ = "0.1.0"
