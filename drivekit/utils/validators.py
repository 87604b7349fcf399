"""Input validators for drivekit.

Provides validation functions for network share requests and settings.
"""

import ipaddress
import re
from typing import Optional, Tuple

# IPv4 address pattern
IPV4_PATTERN = re.compile(
    r'^(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}'
    r'(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)$'
)

# Hostname pattern (simplified, underscores allowed)
HOSTNAME_PATTERN = re.compile(
    r'^(?=.{1,253}$)(?!-)[A-Za-z0-9_-]{1,63}(?<!-)(\.[A-Za-z0-9_-]{1,63})*$'
)


def ipv6_literal(host: str) -> Optional[str]:
    """
    Return the bare IPv6 address if host is an IPv6 literal.

    Args:
        host: Host string, optionally wrapped in brackets

    Returns:
        Address without brackets, or None for anything else
    """
    candidate = host.strip()
    if candidate.startswith("[") and candidate.endswith("]"):
        candidate = candidate[1:-1]
    try:
        return str(ipaddress.IPv6Address(candidate))
    except ValueError:
        return None


def validate_ip_address(ip: str) -> Tuple[bool, Optional[str]]:
    """
    Validate an IPv4 or IPv6 address. IPv6 may be wrapped in brackets.

    Args:
        ip: IP address string to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not ip or not ip.strip():
        return False, "IP address is required"

    ip = ip.strip()

    if IPV4_PATTERN.match(ip):
        return True, None

    if ipv6_literal(ip) is not None:
        return True, None

    return False, f"Invalid IP address format: {ip}"


def validate_hostname(hostname: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a hostname.

    Args:
        hostname: Hostname string to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not hostname or not hostname.strip():
        return False, "Hostname is required"

    hostname = hostname.strip()

    if HOSTNAME_PATTERN.match(hostname):
        return True, None

    return False, f"Invalid hostname format: {hostname}"


def validate_host(host: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a host (IP address or hostname).

    Args:
        host: Host string to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not host or not host.strip():
        return False, "Host is required"

    host = host.strip()

    # Try IP first
    is_valid_ip, _ = validate_ip_address(host)
    if is_valid_ip:
        return True, None

    # Try hostname
    is_valid_hostname, _ = validate_hostname(host)
    if is_valid_hostname:
        return True, None

    return False, f"Invalid host: {host}. Must be a valid IP address or hostname."


def validate_port(port: int) -> Tuple[bool, Optional[str]]:
    """
    Validate a port number.

    Args:
        port: Port number to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(port, int):
        try:
            port = int(port)
        except (ValueError, TypeError):
            return False, "Port must be a number"

    if port < 1 or port > 65535:
        return False, f"Port must be between 1 and 65535, got {port}"

    return True, None


def validate_timeout(timeout: int) -> Tuple[bool, Optional[str]]:
    """
    Validate an external command timeout in seconds.

    Args:
        timeout: Timeout in seconds

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(timeout, int):
        try:
            timeout = int(timeout)
        except (ValueError, TypeError):
            return False, "Timeout must be a number"

    if timeout < 5 or timeout > 300:
        return False, f"Timeout must be between 5 and 300 seconds, got {timeout}"

    return True, None


def validate_mount_name(name: str) -> Tuple[bool, Optional[str]]:
    """
    Validate the directory name used for a new mount point.

    Args:
        name: Mount name (a single path segment)

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not name or not name.strip():
        return False, "Mount name is required"

    if "/" in name or "\\" in name:
        return False, f"Mount name cannot contain path separators: {name}"

    if name in (".", ".."):
        return False, f"Invalid mount name: {name}"

    return True, None


def validate_remote_path(path: str) -> Tuple[bool, Optional[str]]:
    """
    Validate the remote path of a share.

    Args:
        path: Exported path or share name on the server

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not path or not path.strip():
        return False, "Remote path is required"

    return True, None


def validate_share_request(request) -> Tuple[bool, Optional[str]]:
    """
    Validate a NetworkShareRequest before anything is created on disk.

    The protocol tag is not checked here; unknown protocols are reported
    by the mounter itself.

    Args:
        request: NetworkShareRequest to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    is_valid, error = validate_host(request.host)
    if not is_valid:
        return False, error

    if request.port is not None:
        is_valid, error = validate_port(request.port)
        if not is_valid:
            return False, error

    is_valid, error = validate_remote_path(request.remote_path)
    if not is_valid:
        return False, error

    return validate_mount_name(request.mount_name)
