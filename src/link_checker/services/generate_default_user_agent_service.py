# src/link_checker/services/generate_default_user_agent_service.py
DEFAULT_CHROME_VERSION = "120.0.0.0"

OS_PARTS = {
    "Windows": "Windows NT 10.0; Win64; x64",
    "Darwin": "Macintosh; Intel Mac OS X 10_15_7",
    "Linux": "X11; Linux x86_64",
}


def generate_default_user_agent(os_name: str = "Windows", chrome_version: str = DEFAULT_CHROME_VERSION) -> str:
    """
    Builds a generic desktop Chrome user agent string.

    Some hosts answer unknown clients with 403s, so remote probes pretend to be
    a common browser. The result only depends on the arguments, which keeps
    runs reproducible across machines.

    Args:
        os_name (str): 'Windows', 'Darwin' or 'Linux'.
        chrome_version (str): The Chrome version to advertise.

    Returns:
        str: The constructed User-Agent string.
    """
    os_part = OS_PARTS.get(os_name, "Unknown OS")

    user_agent = (
        f"Mozilla/5.0 ({os_part}) AppleWebKit/537.36 (KHTML, like Gecko) "
        f"Chrome/{chrome_version} Safari/537.36"
    )
    return user_agent
