"""
Chat message classification and dispatch.
"""

from dialogue.router import ChatReply, DialogueRouter, Intent, ReplyType, classify

__all__ = ["ChatReply", "DialogueRouter", "Intent", "ReplyType", "classify"]
