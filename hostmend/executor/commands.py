"""Default operation table: operation name -> command line.

Tokens with ``{0}``-style placeholders are filled with the call's arguments;
commands without placeholders get the arguments appended.
"""

DEFAULT_COMMANDS: dict[str, list[str]] = {
    # integrity / image
    "sfc-scan": ["sfc", "/scannow"],
    "dism-restore-health": ["DISM", "/Online", "/Cleanup-Image", "/RestoreHealth"],
    "dism-component-cleanup": ["DISM", "/Online", "/Cleanup-Image", "/StartComponentCleanup"],
    # disk / drivers
    "chkdsk-scan": ["chkdsk", "C:", "/scan"],
    "pnputil-scan": ["pnputil", "/scan-devices"],
    "disk-cleanup": ["cleanmgr", "/sagerun:1"],
    # updates
    "update-install": [
        "powershell",
        "-NoProfile",
        "-Command",
        "Install-WindowsUpdate -AcceptAll {0}",
    ],
    "restart-update-service": [
        "powershell",
        "-NoProfile",
        "-Command",
        "Restart-Service -Name wuauserv -Force",
    ],
    # network stack
    "winsock-reset": ["netsh", "winsock", "reset"],
    "ip-reset": ["netsh", "int", "ip", "reset"],
    "flush-dns": ["ipconfig", "/flushdns"],
    "release-ip": ["ipconfig", "/release"],
    "renew-ip": ["ipconfig", "/renew"],
    "adapter-disable": ["netsh", "interface", "set", "interface", "name={0}", "admin=disabled"],
    "adapter-enable": ["netsh", "interface", "set", "interface", "name={0}", "admin=enabled"],
    # registry / events
    "registry-export": ["reg", "export", "{0}", "{1}", "/y"],
    "query-critical-events": [
        "wevtutil",
        "qe",
        "System",
        "/q:*[System[(Level=1)]]",
        "/c:50",
        "/rd:true",
        "/f:text",
    ],
}
