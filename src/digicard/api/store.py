"""Persistence for cards, users and pricing plans."""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import requests
from pydantic import ValidationError

from digicard.exceptions import CardNotFoundError, CardValidationError, StoreError
from digicard.models import DEFAULT_PLANS, CardRecord, Plan, User
from digicard.utils.text import new_id

logger = logging.getLogger(__name__)


class Store(ABC):
    """
    CRUD over card, user and plan records.

    Every call is atomic on its own; there are no transactions and the last
    write wins.
    """

    @abstractmethod
    def get_card(self, card_id: str) -> CardRecord | None:
        """
        Fetch a card by id.

        Args:
            card_id: Card id.

        Returns:
            CardRecord, or None if no card has this id.

        Raises:
            StoreError: If the backend cannot be read.
        """
        pass

    @abstractmethod
    def get_card_by_slug(self, slug: str) -> CardRecord | None:
        pass

    def find_card(self, ref: str) -> CardRecord | None:
        """
        Resolve a public reference, trying the id first and then the slug.

        Args:
            ref: Card id or slug.

        Returns:
            CardRecord, or None if nothing matches.
        """
        return self.get_card(ref) or self.get_card_by_slug(ref)

    @abstractmethod
    def list_cards(self, owner_id: str) -> list[CardRecord]:
        pass

    @abstractmethod
    def save_card(self, card: CardRecord) -> CardRecord:
        """
        Persist a card.

        A card without id is created: the store assigns id and created_at.
        A card with id overwrites the stored record.

        Args:
            card: Record to persist.

        Returns:
            The record as stored.

        Raises:
            StoreError: If the write fails.
            CardValidationError: If the slug is used by another card.
        """
        pass

    @abstractmethod
    def delete_card(self, card_id: str) -> None:
        """
        Hard-delete a card.

        Raises:
            CardNotFoundError: If no card has this id.
            StoreError: If the write fails.
        """
        pass

    @abstractmethod
    def increment_views(self, card_id: str) -> int:
        """
        Count one public view.

        Returns:
            The new view count.

        Raises:
            CardNotFoundError: If no card has this id.
            StoreError: If the write fails.
        """
        pass

    @abstractmethod
    def get_plans(self) -> list[Plan]:
        pass

    @abstractmethod
    def save_plan(self, plan: Plan) -> Plan:
        pass

    @abstractmethod
    def delete_plan(self, plan_id: str) -> None:
        pass

    @abstractmethod
    def get_user(self, user_id: str) -> User | None:
        pass

    @abstractmethod
    def save_user(self, user: User) -> User:
        pass


class LocalStore(Store):
    """
    Store backed by one JSON document on disk.

    Layout of the document:

        {
          "cards":    {"<id>": {...card...}},
          "users":    {"<id>": {...user...}},
          "accounts": {"<email>": {"userId": "...", "passwordHash": "..."}},
          "plans":    [{...plan...}]
        }

    The file is read on every call and replaced atomically on every write.
    Plans are seeded with the default offerings on first read.
    """

    def __init__(self, path: Path) -> None:
        """
        Initialize local store.

        Args:
            path: JSON file. Created with its parent directory on first write.
        """
        self.path = Path(path)

    # ------------------------------------------------------------------
    # Document I/O
    # ------------------------------------------------------------------

    def _read(self) -> dict[str, Any]:
        try:
            with open(self.path, encoding="utf-8") as f:
                doc = json.load(f)
        except FileNotFoundError:
            doc = {}
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Cannot read store {self.path}: {e}") from e

        if not isinstance(doc, dict):
            raise StoreError(f"Cannot read store {self.path}: expected a JSON object")
        doc.setdefault("cards", {})
        doc.setdefault("users", {})
        doc.setdefault("accounts", {})
        if "plans" not in doc:
            doc["plans"] = [plan.to_json_dict() for plan in DEFAULT_PLANS]
        return doc

    def _write(self, doc: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".store-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(doc, f, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as e:
            raise StoreError(f"Cannot write store {self.path}: {e}") from e

    @staticmethod
    def _parse_card(data: dict) -> CardRecord:
        try:
            return CardRecord.model_validate(data)
        except ValidationError as e:
            raise StoreError(f"Stored card is invalid: {e}") from e

    # ------------------------------------------------------------------
    # Cards
    # ------------------------------------------------------------------

    def get_card(self, card_id: str) -> CardRecord | None:
        data = self._read()["cards"].get(card_id)
        return self._parse_card(data) if data is not None else None

    def get_card_by_slug(self, slug: str) -> CardRecord | None:
        if not slug:
            return None
        for data in self._read()["cards"].values():
            if data.get("slug") == slug:
                return self._parse_card(data)
        return None

    def list_cards(self, owner_id: str) -> list[CardRecord]:
        return [
            self._parse_card(data)
            for data in self._read()["cards"].values()
            if data.get("ownerId") == owner_id
        ]

    def save_card(self, card: CardRecord) -> CardRecord:
        doc = self._read()
        cards = doc["cards"]

        if card.slug:
            for other_id, data in cards.items():
                if data.get("slug") == card.slug and other_id != card.id:
                    raise CardValidationError("slug", f"'{card.slug}' is already taken")

        existing = self._parse_card(cards[card.id]) if card.id in cards else None
        if card.id is None:
            card = card.model_copy(update={
                "id": f"c{new_id()}",
                "created_at": datetime.now(timezone.utc),
            })
        elif existing is not None:
            # created_at is set once; views never go down
            card = card.model_copy(update={
                "created_at": existing.created_at or card.created_at,
                "views": max(existing.views, card.views),
            })
        elif card.created_at is None:
            card = card.model_copy(update={"created_at": datetime.now(timezone.utc)})

        cards[card.id] = card.to_json_dict()
        self._write(doc)
        logger.info(f"Saved card {card.id} ({card.full_name})")
        return card

    def delete_card(self, card_id: str) -> None:
        doc = self._read()
        if card_id not in doc["cards"]:
            raise CardNotFoundError(card_id)
        del doc["cards"][card_id]
        self._write(doc)
        logger.info(f"Deleted card {card_id}")

    def increment_views(self, card_id: str) -> int:
        doc = self._read()
        data = doc["cards"].get(card_id)
        if data is None:
            raise CardNotFoundError(card_id)
        data["views"] = int(data.get("views", 0)) + 1
        self._write(doc)
        return data["views"]

    # ------------------------------------------------------------------
    # Plans
    # ------------------------------------------------------------------

    def get_plans(self) -> list[Plan]:
        return [Plan.model_validate(data) for data in self._read()["plans"]]

    def save_plan(self, plan: Plan) -> Plan:
        doc = self._read()
        # Edited plans keep their position in the pricing list
        plans = [plan.to_json_dict() if data.get("id") == plan.id else data for data in doc["plans"]]
        if not any(data.get("id") == plan.id for data in doc["plans"]):
            plans.append(plan.to_json_dict())
        doc["plans"] = plans
        self._write(doc)
        return plan

    def delete_plan(self, plan_id: str) -> None:
        doc = self._read()
        doc["plans"] = [data for data in doc["plans"] if data.get("id") != plan_id]
        self._write(doc)

    # ------------------------------------------------------------------
    # Users and accounts
    # ------------------------------------------------------------------

    def get_user(self, user_id: str) -> User | None:
        data = self._read()["users"].get(user_id)
        return User.model_validate(data) if data is not None else None

    def save_user(self, user: User) -> User:
        doc = self._read()
        doc["users"][user.id] = user.to_json_dict()
        self._write(doc)
        return user

    def get_account(self, email: str) -> dict[str, str] | None:
        """
        Look up login credentials.

        Args:
            email: Normalized (lowercase) email address.

        Returns:
            Dict with "userId" and "passwordHash", or None.
        """
        return self._read()["accounts"].get(email)

    def create_account(self, email: str, password_hash: str, user: User) -> User:
        """
        Store a new user together with its credentials in one write.

        Args:
            email: Normalized (lowercase) email address.
            password_hash: passlib hash of the password.
            user: User record.

        Returns:
            The stored user.

        Raises:
            CardValidationError: If the email is already registered.
        """
        doc = self._read()
        if email in doc["accounts"]:
            raise CardValidationError("email", f"'{email}' is already registered")
        doc["accounts"][email] = {"userId": user.id, "passwordHash": password_hash}
        doc["users"][user.id] = user.to_json_dict()
        self._write(doc)
        return user


class RestStore(Store):
    """
    Store backed by the card REST backend.

    Endpoints (relative to the configured base URL):

        GET    /cards/{ref}        card by id or slug
        GET    /cards?userId=...   cards of one owner
        POST   /cards              create or overwrite a card
        DELETE /cards/{id}         delete a card
        POST   /cards/{id}/views   count a public view
        GET    /plans, POST /plans, DELETE /plans/{id}
        GET    /users/{id}, POST /users
    """

    def __init__(self, url: str, timeout: float = 10.0) -> None:
        """
        Initialize REST store.

        Args:
            url: Base URL of the backend, e.g. "http://localhost:8000/api".
            timeout: Request timeout in seconds.
        """
        self.url = url.rstrip("/")
        self.timeout = timeout

    def request(
        self,
        method: str,
        path: str,
        allow_missing: bool = False,
        **kwargs: Any,
    ) -> Any:
        """
        Call the backend and decode the JSON response.

        Args:
            method: HTTP method.
            path: Path below the base URL, starting with "/".
            allow_missing: Return None for 404 instead of raising.
            **kwargs: Passed to requests.request (json, params, ...).

        Returns:
            Decoded JSON body (None for empty bodies and allowed 404s).

        Raises:
            StoreError: On connection errors, error statuses or bad JSON.
        """
        url = f"{self.url}{path}"
        headers = {"accept": "application/json"}
        try:
            response = requests.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
            if allow_missing and response.status_code == 404:
                return None
            response.raise_for_status()
            if not response.content:
                return None
            return response.json()
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise StoreError(f"{method} {path} failed: {e}") from e
        except ValueError as e:
            raise StoreError(f"{method} {path} returned invalid JSON: {e}") from e

    def _parse(self, model: type, data: Any):
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise StoreError(f"Backend returned an invalid {model.__name__}: {e}") from e

    def get_card(self, card_id: str) -> CardRecord | None:
        data = self.request("GET", f"/cards/{card_id}", allow_missing=True)
        return self._parse(CardRecord, data) if data is not None else None

    def get_card_by_slug(self, slug: str) -> CardRecord | None:
        # The backend resolves ids and slugs on the same route
        if not slug:
            return None
        return self.get_card(slug)

    def find_card(self, ref: str) -> CardRecord | None:
        return self.get_card(ref)

    def list_cards(self, owner_id: str) -> list[CardRecord]:
        data = self.request("GET", "/cards", params={"userId": owner_id}) or []
        return [self._parse(CardRecord, item) for item in data]

    def save_card(self, card: CardRecord) -> CardRecord:
        payload = card.to_json_dict()
        if card.id is None:
            payload.pop("id", None)
        data = self.request("POST", "/cards", json=payload)
        saved = self._parse(CardRecord, data) if data is not None else card
        logger.info(f"Saved card {saved.id} ({saved.full_name})")
        return saved

    def delete_card(self, card_id: str) -> None:
        # DELETE answers 200 with an empty body either way
        if self.get_card(card_id) is None:
            raise CardNotFoundError(card_id)
        self.request("DELETE", f"/cards/{card_id}")
        logger.info(f"Deleted card {card_id}")

    def increment_views(self, card_id: str) -> int:
        data = self.request("POST", f"/cards/{card_id}/views", allow_missing=True)
        if data is None:
            raise CardNotFoundError(card_id)
        views = data.get("views") if isinstance(data, dict) else None
        if not isinstance(views, int) or isinstance(views, bool):
            raise StoreError(f"POST /cards/{card_id}/views returned no view count: {data!r}")
        return views

    def get_plans(self) -> list[Plan]:
        data = self.request("GET", "/plans") or []
        return [self._parse(Plan, item) for item in data]

    def save_plan(self, plan: Plan) -> Plan:
        data = self.request("POST", "/plans", json=plan.to_json_dict())
        return self._parse(Plan, data) if data is not None else plan

    def delete_plan(self, plan_id: str) -> None:
        self.request("DELETE", f"/plans/{plan_id}", allow_missing=True)

    def get_user(self, user_id: str) -> User | None:
        data = self.request("GET", f"/users/{user_id}", allow_missing=True)
        return self._parse(User, data) if data is not None else None

    def save_user(self, user: User) -> User:
        data = self.request("POST", "/users", json=user.to_json_dict())
        return self._parse(User, data) if data is not None else user


def create_store(backend: str, path: Path, url: str, timeout: float = 10.0) -> Store:
    """
    Build the store selected in configuration.

    Args:
        backend: "local" or "rest".
        path: JSON file for the local backend.
        url: Base URL for the REST backend.
        timeout: Request timeout for the REST backend.

    Returns:
        Store instance.

    Raises:
        ValueError: If the backend name is unknown.
    """
    if backend == "local":
        return LocalStore(path)
    if backend == "rest":
        return RestStore(url, timeout=timeout)
    raise ValueError(f"Unknown store backend: {backend}")
