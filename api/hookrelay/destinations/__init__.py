from hookrelay.destinations.base import Destination
from hookrelay.destinations.discord import DiscordWebhook
from hookrelay.destinations.twilio import TwilioSms

__all__ = ["Destination", "DiscordWebhook", "TwilioSms"]
