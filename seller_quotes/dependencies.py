from typing import Optional

from fastapi import Depends, Header, HTTPException
from seller_quotes.core.config import settings
from seller_quotes.services.directory_client import DirectoryClient
from seller_quotes.services.mail_client import MailClient
from seller_quotes.services.masterdata_client import MasterDataClient
from seller_quotes.services.metrics import MetricsSink
from seller_quotes.services.name_resolver import NameResolver
from seller_quotes.services.notification_service import QuoteNotifier
from seller_quotes.services.permissions_client import PermissionsClient
from seller_quotes.services.seller_quotes_service import SellerQuotesService

metrics_sink = MetricsSink()


def get_seller(x_seller_id: Optional[str] = Header(None)) -> str:
    if not x_seller_id or not x_seller_id.strip():
        raise HTTPException(status_code=400, detail="missing-seller-scope")
    return x_seller_id.strip()


def get_name_resolver() -> NameResolver:
    return NameResolver(DirectoryClient())


def get_seller_quotes_service(seller: str = Depends(get_seller)) -> SellerQuotesService:
    return SellerQuotesService(MasterDataClient(), get_name_resolver(), seller)


def get_quote_notifier(x_root_path: Optional[str] = Header(None)) -> QuoteNotifier:
    return QuoteNotifier(
        mail=MailClient(),
        permissions=PermissionsClient(),
        resolver=get_name_resolver(),
        metrics=metrics_sink,
        account=settings.ACCOUNT,
        host=settings.HOST,
        root_path=x_root_path if x_root_path is not None else settings.ROOT_PATH,
        sales_admin_role=settings.SALES_ADMIN_ROLE,
    )
