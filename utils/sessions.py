"""
Sessions Module - Server-side session storage

The cookie only carries a signed, random session id. The payload (the
logged-in user id plus pending flash messages) lives in the `sessions`
table, so logging out can destroy it for good.
"""

import secrets

import click
from flask import current_app, session
from flask.json.tag import TaggedJSONSerializer
from flask.sessions import SessionInterface, SessionMixin
from itsdangerous import BadSignature, Signer
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.datastructures import CallbackDict

from extensions import db
from models import SessionRecord, utcnow
from .errors import InfrastructureError, SessionTeardownError


class ServerSideSession(CallbackDict, SessionMixin):
    """Session dict that remembers its sid and whether it was touched"""

    def __init__(self, initial=None, sid=None, new=False):
        def on_update(self):
            self.modified = True

        super().__init__(initial, on_update)
        self.sid = sid
        self.new = new
        self.modified = False
        self.destroyed = False


class SqlAlchemySessionInterface(SessionInterface):
    serializer = TaggedJSONSerializer()
    session_class = ServerSideSession

    def get_signer(self, app):
        if not app.secret_key:
            return None
        return Signer(
            app.secret_key,
            salt=app.config.get('SESSION_SIGNER_SALT', 'todoauth.session.v1'),
            key_derivation='hmac'
        )

    def generate_sid(self):
        return secrets.token_urlsafe(32)

    def new_session(self):
        return self.session_class(sid=self.generate_sid(), new=True)

    def open_session(self, app, request):
        signer = self.get_signer(app)
        if signer is None:
            return None

        cookie = request.cookies.get(self.get_cookie_name(app))
        if not cookie:
            return self.new_session()

        try:
            sid = signer.unsign(cookie).decode('utf-8')
        except BadSignature:
            app.logger.warning('Ignoring session cookie with a bad signature')
            return self.new_session()

        record = db.session.get(SessionRecord, sid)
        if record is None or record.expires_at <= utcnow():
            # Unknown or expired: start over with a sid we generated ourselves
            return self.new_session()

        try:
            data = self.serializer.loads(record.data)
        except ValueError:
            app.logger.error(f"Discarding unreadable session payload for {sid[:8]}")
            return self.new_session()
        return self.session_class(data, sid=sid)

    def save_session(self, app, session, response):
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)
        secure = self.get_cookie_secure(app)
        samesite = self.get_cookie_samesite(app)
        httponly = self.get_cookie_httponly(app)

        if session.accessed:
            response.vary.add('Cookie')

        if session.destroyed:
            response.delete_cookie(name, domain=domain, path=path, secure=secure,
                                   samesite=samesite, httponly=httponly)
            return

        if not session:
            # Nothing worth keeping: don't store empty sessions
            if session.modified and not session.new:
                try:
                    self.delete_record(session.sid)
                except SQLAlchemyError as e:
                    db.session.rollback()
                    app.logger.error(f"Error removing emptied session: {str(e)}")
                response.delete_cookie(name, domain=domain, path=path, secure=secure,
                                       samesite=samesite, httponly=httponly)
            return

        if not self.should_set_cookie(app, session):
            return

        try:
            record = db.session.get(SessionRecord, session.sid)
            if record is None:
                record = SessionRecord(sid=session.sid)
                db.session.add(record)
            record.data = self.serializer.dumps(dict(session))
            record.expires_at = utcnow() + app.permanent_session_lifetime
            db.session.commit()
        except SQLAlchemyError as e:
            # The response is already decided; a cookie for an unsaved sid is useless
            db.session.rollback()
            app.logger.error(f"Error saving session: {str(e)}")
            return

        response.set_cookie(
            name,
            self.get_signer(app).sign(session.sid).decode('utf-8'),
            expires=self.get_expiration_time(app, session),
            httponly=httponly,
            domain=domain,
            path=path,
            secure=secure,
            samesite=samesite
        )

    def delete_record(self, sid):
        SessionRecord.query.filter_by(sid=sid).delete()
        db.session.commit()

    def regenerate(self, session):
        """Move the session's contents to a fresh sid.

        Called right before a login so a sid handed out to an anonymous
        visitor can never become an authenticated one.
        """
        if not session.new:
            try:
                self.delete_record(session.sid)
            except SQLAlchemyError as e:
                db.session.rollback()
                raise InfrastructureError(f'Failed to rotate session: {e}') from e
        session.sid = self.generate_sid()
        session.new = True
        session.modified = True

    def destroy(self, session):
        """Delete the stored session and clear the cookie on the way out.

        On failure the session is left in place (already stripped of its
        login by the caller) and SessionTeardownError is raised.
        """
        try:
            self.delete_record(session.sid)
        except SQLAlchemyError as e:
            db.session.rollback()
            raise SessionTeardownError(f'Failed to destroy session: {e}') from e
        session.clear()
        session.destroyed = True

    def purge_expired(self):
        """Remove expired rows, returns how many were deleted"""
        count = SessionRecord.query.filter(SessionRecord.expires_at <= utcnow()).delete()
        db.session.commit()
        return count


def regenerate_session():
    """Give the session of the current request a new sid"""
    current_app.session_interface.regenerate(session._get_current_object())


def destroy_session():
    """Destroy the session of the current request"""
    current_app.session_interface.destroy(session._get_current_object())


def init_app(app):
    """Install the server-side session interface and its CLI command"""
    app.session_interface = SqlAlchemySessionInterface()

    @app.cli.command('purge-sessions')
    def purge_sessions_command():
        """Delete expired server-side sessions."""
        count = app.session_interface.purge_expired()
        click.echo(f'Purged {count} expired session(s).')
