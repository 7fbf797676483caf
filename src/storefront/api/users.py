"""FastAPI endpoints for users, profiles, address books and wishlists."""

from fastapi import APIRouter, Depends, HTTPException, Query
from protean.utils.globals import current_domain

from storefront.api.dependencies import get_current_user, require_admin
from storefront.api.schemas import (
    AddressesResponse,
    AddressRequest,
    AdminUpdateUserRequest,
    AuthResponse,
    LoginRequest,
    MessageResponse,
    ProductResponse,
    RegisterRequest,
    UpdateAddressRequest,
    UpdateProfileRequest,
    UserListResponse,
    UserResponse,
    UserSummary,
    WishlistRequest,
    WishlistResponse,
)
from storefront.api.serializers import address_response, product_responses, user_response, user_summary
from storefront.auth.tokens import issue_token
from storefront.errors import get_or_raise
from storefront.product.product import Product
from storefront.user.addresses import AddAddress, RemoveAddress, UpdateAddress
from storefront.user.administration import DeleteUser, UpdateUser
from storefront.user.authentication import InvalidCredentials, authenticate
from storefront.user.profile import UpdateProfile
from storefront.user.registration import RegisterUser
from storefront.user.user import User
from storefront.user.wishlist import AddToWishlist, RemoveFromWishlist
from storefront.utils.pagination import paginate

router = APIRouter(prefix="/users", tags=["users"])


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        id=str(user.id),
        name=user.name,
        email=user.email,
        role=user.role,
        phone=user.phone,
        token=issue_token(str(user.id), user.role),
    )


def _reload(user_id) -> User:
    return current_domain.repository_for(User).get(user_id)


# --- Registration & login ---


@router.post("", status_code=201, response_model=AuthResponse)
async def register(body: RegisterRequest) -> AuthResponse:
    user_id = current_domain.process(
        RegisterUser(
            name=body.name,
            email=body.email,
            password=body.password,
            phone=body.phone,
        ),
        asynchronous=False,
    )
    return _auth_response(_reload(user_id))


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest) -> AuthResponse:
    try:
        user = authenticate(body.email, body.password)
    except InvalidCredentials:
        raise HTTPException(status_code=401, detail="Invalid email or password") from None
    return _auth_response(user)


# --- Own profile ---


@router.get("/profile", response_model=UserResponse)
async def get_profile(current_user: User = Depends(get_current_user)) -> UserResponse:
    return user_response(current_user)


@router.put("/profile", response_model=AuthResponse)
async def update_profile(body: UpdateProfileRequest, current_user: User = Depends(get_current_user)) -> AuthResponse:
    current_domain.process(
        UpdateProfile(
            user_id=str(current_user.id),
            name=body.name,
            email=body.email,
            phone=body.phone,
            password=body.password,
        ),
        asynchronous=False,
    )
    return _auth_response(_reload(current_user.id))


# --- Address book ---


@router.post("/address", status_code=201, response_model=AddressesResponse)
async def add_address(body: AddressRequest, current_user: User = Depends(get_current_user)) -> AddressesResponse:
    current_domain.process(
        AddAddress(
            user_id=str(current_user.id),
            street=body.street,
            city=body.city,
            state=body.state,
            postal_code=body.postal_code,
            country=body.country,
            is_default=body.is_default,
        ),
        asynchronous=False,
    )
    user = _reload(current_user.id)
    return AddressesResponse(addresses=[address_response(a) for a in user.addresses])


@router.put("/address/{address_id}", response_model=AddressesResponse)
async def update_address(
    address_id: str, body: UpdateAddressRequest, current_user: User = Depends(get_current_user)
) -> AddressesResponse:
    current_domain.process(
        UpdateAddress(
            user_id=str(current_user.id),
            address_id=address_id,
            street=body.street,
            city=body.city,
            state=body.state,
            postal_code=body.postal_code,
            country=body.country,
            is_default=body.is_default,
        ),
        asynchronous=False,
    )
    user = _reload(current_user.id)
    return AddressesResponse(addresses=[address_response(a) for a in user.addresses])


@router.delete("/address/{address_id}", response_model=AddressesResponse)
async def remove_address(address_id: str, current_user: User = Depends(get_current_user)) -> AddressesResponse:
    current_domain.process(
        RemoveAddress(user_id=str(current_user.id), address_id=address_id),
        asynchronous=False,
    )
    user = _reload(current_user.id)
    return AddressesResponse(addresses=[address_response(a) for a in user.addresses])


# --- Wishlist ---


@router.get("/wishlist", response_model=list[ProductResponse])
async def get_wishlist(current_user: User = Depends(get_current_user)) -> list[ProductResponse]:
    repo = current_domain.repository_for(Product)
    products = []
    for item in current_user.wishlist:
        # Products deleted after being wishlisted are skipped
        product = repo._dao.query.filter(id=str(item.product_id)).all().first
        if product is not None:
            products.append(product)
    return product_responses(products)


@router.post("/wishlist", status_code=201, response_model=WishlistResponse)
async def add_to_wishlist(body: WishlistRequest, current_user: User = Depends(get_current_user)) -> WishlistResponse:
    current_domain.process(
        AddToWishlist(user_id=str(current_user.id), product_id=body.product_id),
        asynchronous=False,
    )
    user = _reload(current_user.id)
    return WishlistResponse(wishlist=[str(item.product_id) for item in user.wishlist])


@router.delete("/wishlist/{product_id}", response_model=WishlistResponse)
async def remove_from_wishlist(product_id: str, current_user: User = Depends(get_current_user)) -> WishlistResponse:
    current_domain.process(
        RemoveFromWishlist(user_id=str(current_user.id), product_id=product_id),
        asynchronous=False,
    )
    user = _reload(current_user.id)
    return WishlistResponse(wishlist=[str(item.product_id) for item in user.wishlist])


# --- Administration ---


@router.get("", response_model=UserListResponse)
async def list_users(
    page: int | None = Query(None),
    page_size: int | None = Query(None, alias="pageSize"),
    admin: User = Depends(require_admin),
) -> UserListResponse:
    result = paginate(current_domain.repository_for(User).listing(), page, page_size)
    return UserListResponse(
        users=[user_summary(u) for u in result.items],
        page=result.page,
        pages=result.pages,
        total_users=result.total,
    )


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, admin: User = Depends(require_admin)) -> UserResponse:
    return user_response(get_or_raise(User, user_id))


@router.put("/{user_id}", response_model=UserSummary)
async def update_user(user_id: str, body: AdminUpdateUserRequest, admin: User = Depends(require_admin)) -> UserSummary:
    current_domain.process(
        UpdateUser(user_id=user_id, name=body.name, email=body.email, role=body.role),
        asynchronous=False,
    )
    return user_summary(_reload(user_id))


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: str, admin: User = Depends(require_admin)) -> MessageResponse:
    current_domain.process(DeleteUser(user_id=user_id), asynchronous=False)
    return MessageResponse(message="User removed")
