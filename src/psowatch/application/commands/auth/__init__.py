from psowatch.application.commands.auth.sign_in_command import (
    SignInCommand,
    SignInResult,
)

__all__ = ["SignInCommand", "SignInResult"]
