from psowatch.domain.user.repositories.user_directory import UserDirectory

__all__ = ["UserDirectory"]
