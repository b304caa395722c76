"""
Auth Operations for Veiligheidsbladen Beheer.

Session lifecycle and sign-in/sign-up, plus the connection test.

- get_initial_session() - Restore session at startup (bounded wait)
- sign_in() / sign_up() / sign_out()
- handle_operation_error() - Invalidate session on auth-classified errors
- check_connection() - Session and database diagnostics
"""

import concurrent.futures
import logging
from typing import Optional

from config.app_context import AppContext
from config.constants import ERROR_MESSAGES, SESSION_TIMEOUT_SECONDS
from data.interface import AuthInterface, DatabaseInterface
from domain.exceptions import AuthError, ValidationError
from domain.models import AuthSession, AuthUser, ConnectionStatus
from domain.rules import is_auth_error
from domain.validators import validate_email, validate_password

logger = logging.getLogger(__name__)


def get_initial_session(
    auth: AuthInterface,
    timeout: float = SESSION_TIMEOUT_SECONDS,
) -> Optional[AuthSession]:
    """
    Fetch the persisted session, waiting at most `timeout` seconds.

    A slow or failing auth service must not block startup: timeout and
    errors are logged and treated as "not signed in".

    Returns:
        AuthSession or None
    """
    executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
    future = executor.submit(auth.get_session)
    try:
        session = future.result(timeout=timeout)
    except concurrent.futures.TimeoutError:
        logger.warning(f"{ERROR_MESSAGES['auth_timeout']} after {timeout}s")
        future.cancel()
        return None
    except Exception as e:
        logger.error(f"Could not restore session: {e}")
        return None
    finally:
        executor.shutdown(wait=False)

    if session:
        logger.info(f"Restored session for {session.email}")
    else:
        logger.info("No active session")
    return session


def _validate_credentials(email: str, password: str):
    if not email or not email.strip() or not password:
        raise ValidationError(ERROR_MESSAGES["missing_fields"])
    return validate_email(email), validate_password(password)


def sign_in(auth: AuthInterface, email: str, password: str) -> AuthSession:
    """
    Sign in with email and password.

    Raises:
        ValidationError: If a field is missing or the password is too short
        AuthError: If the credentials are rejected
    """
    email, password = _validate_credentials(email, password)

    try:
        session = auth.sign_in_with_password(email, password)
    except AuthError as e:
        logger.warning(f"Sign in failed for {email}: {e.message}")
        if is_auth_error(e):
            sign_out(auth)
        raise AuthError(ERROR_MESSAGES["login_failed"], details={"reason": e.message}, status=e.status)

    logger.info(f"Signed in: {email}")
    return session


def sign_up(auth: AuthInterface, email: str, password: str) -> AuthUser:
    """
    Create an account.

    Raises:
        ValidationError: If a field is missing or the password is too short
        AuthError: If the auth service refuses the account
    """
    email, password = _validate_credentials(email, password)

    try:
        user = auth.sign_up(email, password)
    except AuthError as e:
        logger.warning(f"Sign up failed for {email}: {e.message}")
        raise

    logger.info(f"Account created: {email}")
    return user


def sign_out(auth: AuthInterface) -> None:
    """
    Sign out on the auth service.

    Never raises; the caller clears local session state regardless.
    """
    try:
        auth.sign_out()
        logger.info("Signed out")
    except Exception as e:
        logger.warning(f"Sign out failed (local session cleared anyway): {e}")


def handle_operation_error(context: AppContext, error: Exception) -> AppContext:
    """
    React to an error from any backend call.

    Auth-classified errors invalidate the session: the backend session is
    signed out and a context without session is returned (caller shows
    the login screen). Other errors leave the context unchanged.

    Returns:
        AppContext (same instance if the error is not auth related)
    """
    if not is_auth_error(error):
        return context

    logger.warning(f"Auth error, clearing session: {error}")
    sign_out(context.auth)
    return context.clear_session()


def check_connection(auth: AuthInterface, db: DatabaseInterface) -> ConnectionStatus:
    """
    Check the auth service and the database.

    Returns:
        ConnectionStatus (never raises)
    """
    status = ConnectionStatus()

    try:
        session = auth.get_session()
        status.session_ok = True
        if session:
            status.user_email = session.email
            status.session_message = f"Ingelogd als {session.email}"
        else:
            status.session_message = "Geen actieve sessie"
    except Exception as e:
        status.session_message = f"Sessie fout: {getattr(e, 'message', e)}"
        logger.error(f"Connection test (session) failed: {e}")

    try:
        count = db.ping()
        status.database_ok = True
        status.database_message = f"Database bereikbaar ({count} rij(en) opgehaald)"
    except Exception as e:
        status.database_message = f"Database fout: {getattr(e, 'message', e)}"
        logger.error(f"Connection test (database) failed: {e}")

    return status
