from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    start_url: str = (
        "https://www.ramakrishnavivekananda.info/vivekananda/master_index.htm"
    )
    # hosts are accepted when equal to, or a subdomain of, this domain
    target_domain: str = "ramakrishnavivekananda.info"
    target_language: str = "en"
    accepted_extensions: tuple[str, ...] = (".htm", ".html")
    excluded_path_fragments: tuple[str, ...] = (
        "/images/",
        "/downloads/",
        "/bengali/",
        "/bangla/",
    )
    batch_size: int = 10
    request_timeout: float = 15.0
    max_redirects: int = 5
    max_pages: Optional[int] = None
    highlight_tag: str = "b"
    user_agent: str = "CompleteWorksSearch/1.0"
    log_level: str = "INFO"

    model_config = {"env_file": ".env"}


settings = Settings()
