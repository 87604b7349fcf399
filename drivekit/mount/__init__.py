"""Mount operations module.

This module provides:
- Mounter: local device mount/unmount per platform
- NetworkMounter: SSHFS/NFS/SMB share mounting
- CommandRunner: external tool execution with timeouts
- PlatformFactory: picks the variants for the host
"""
