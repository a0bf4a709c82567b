"""Built-in Laravel selection, cleanup and grouping patterns."""

from __future__ import annotations

_SEGMENTS = r"(?:[A-Za-z0-9_-]+/)*"

LARAVEL_INCLUDE: tuple[str, ...] = (
    rf"API/{_SEGMENTS}.*Controller\.php$",
    rf"Controllers/{_SEGMENTS}.*Controller\.php$",
    r"Services/.*Service\.php$",
    r"Events/.*Event\.php$",
    r"Listeners/.*Listener\.php$",
    r"Notification/.*.php$",
    r"Dto/.*.php$",
    r"Actions/.*.php$",
    r"Enums/.*.php$",
    r"Jobs/.*.php$",
    r"Mail/.*.php$",
    r"Rules/.*.php$",
    r"TelegramBot/.*\.php$",
    r"Http/Requests/.*Request\.php$",
    r"Http/Resources/.*Resource\.php$",
    rf"Imports/{_SEGMENTS}.*\.php$",
    rf"Models/{_SEGMENTS}.*\.php$",
    rf"Notifications/{_SEGMENTS}.*\.php$",
    rf"Providers/{_SEGMENTS}.*\.php$",
    rf"Observers/{_SEGMENTS}.*\.php$",
    rf"Policies/{_SEGMENTS}.*\.php$",
)

LARAVEL_EXCLUDE: tuple[str, ...] = (
    r"Middleware/(Authenticate|EncryptCookies|PreventRequestDuringMaintenance"
    r"|RedirectIfAuthenticated|TrimStrings|TrustHosts|TrustProxies"
    r"|ValidateSignature|VerifyCsrfToken)\.php$",
    r"Providers/(RouteServiceProvider|EventServiceProvider)\.php$",
)

# Applied to already-minified text. ``.*?}`` stops at the first closing
# brace, so a method body with nested braces is only partly removed.
LARAVEL_CONTENT_CLEANUP: tuple[str, ...] = (
    r"protected \$fillable=\[.*?\];",
    r"protected \$casts=\[.*?\];",
    r"public function __construct\(\).*?}",
    r"public function __construct\(\){}}",
    r"public function toArray\(\).*?}",
)

LARAVEL_GROUPS: tuple[tuple[str, str], ...] = (
    ("models", r"Models/.*\.php$"),
    ("services", r"Services/.*\.php$"),
    ("events", r"Events/.*\.php$"),
    ("listeners", r"Listeners/.*\.php$"),
    ("controllers", r"Controllers/.*\.php$"),
)

OTHER_GROUP = "other"

__all__ = [
    "LARAVEL_CONTENT_CLEANUP",
    "LARAVEL_EXCLUDE",
    "LARAVEL_GROUPS",
    "LARAVEL_INCLUDE",
    "OTHER_GROUP",
]
