import pytest

from kittychain.frame import Balances, DispatchError, Origin, System
from kittychain.kitties import Ask, Created, KittiesModule, Sold, Transferred
from kittychain.linked_item import LinkedItem


@pytest.fixture
def system():
    s = System()
    s.set_block_number(1)
    return s


@pytest.fixture
def balances():
    return Balances()


@pytest.fixture
def module(system, balances):
    return KittiesModule(system, balances)


def _create(module, account):
    kitty_id = module.create(Origin.signed(account))
    module.system.note_extrinsic()
    return kitty_id


def test_create_stores_kitty_and_owner(module, system):
    kitty_id = _create(module, 1)
    assert kitty_id == 0
    assert module.kitties_count() == 1
    assert module.kitty_owner(0) == 1
    assert len(module.kitty(0).dna) == 16
    assert module.owned_kitty_ids(1) == [0]
    assert system.events == [Created(1, 0)]


def test_create_requires_signed_origin(module):
    with pytest.raises(DispatchError):
        module.create(Origin.none())
    assert module.kitties_count() == 0


def test_created_kitties_have_distinct_dna(module):
    a = _create(module, 1)
    b = _create(module, 1)
    assert module.kitty(a).dna != module.kitty(b).dna
    assert module.owned_kitty_ids(1) == [a, b]


def test_owned_kitties_links(module):
    _create(module, 0)
    _create(module, 0)
    assert module.owned_kitties(0, None) == LinkedItem(prev=1, next=0)
    assert module.owned_kitties(0, 0) == LinkedItem(prev=None, next=1)
    assert module.owned_kitties(0, 1) == LinkedItem(prev=0, next=None)


def test_count_overflow(system, balances):
    module = KittiesModule(system, balances, max_index=1)
    module.create(Origin.signed(1))
    with pytest.raises(DispatchError, match="Kitties count overflow"):
        module.create(Origin.signed(1))
    assert module.kitties_count() == 1


def test_breed_mixes_parent_bits(module, system):
    a = _create(module, 1)
    b = _create(module, 1)
    child = module.breed(Origin.signed(1), a, b)
    assert child == 2
    assert module.kitty_owner(child) == 1
    p1, p2 = module.kitty(a).dna, module.kitty(b).dna
    for x, y, c in zip(p1, p2, module.kitty(child).dna):
        assert c & ~(x | y) & 0xFF == 0
        assert (x & y) & ~c & 0xFF == 0
    assert system.events[-1] == Created(1, child)


def test_breed_errors(module):
    a = _create(module, 1)
    b = _create(module, 2)
    with pytest.raises(DispatchError, match="Invalid kitty_id_1"):
        module.breed(Origin.signed(1), 99, a)
    with pytest.raises(DispatchError, match="Invalid kitty_id_2"):
        module.breed(Origin.signed(1), a, 99)
    with pytest.raises(DispatchError, match="Needs different parent"):
        module.breed(Origin.signed(1), a, a)
    with pytest.raises(DispatchError, match="kitty1"):
        module.breed(Origin.signed(2), a, b)
    with pytest.raises(DispatchError, match="kitty2"):
        module.breed(Origin.signed(1), a, b)
    assert module.kitties_count() == 2


def test_transfer_moves_ownership(module, system):
    a = _create(module, 1)
    b = _create(module, 1)
    module.transfer(Origin.signed(1), 2, a)
    assert module.kitty_owner(a) == 2
    assert module.owned_kitty_ids(1) == [b]
    assert module.owned_kitty_ids(2) == [a]
    assert module.owned_kitties(1, a) is None
    assert system.events[-1] == Transferred(1, 2, a)


def test_transfer_by_non_owner_fails(module):
    a = _create(module, 1)
    with pytest.raises(DispatchError, match="Only owner can transfer kitty"):
        module.transfer(Origin.signed(2), 3, a)
    assert module.kitty_owner(a) == 1


def test_ask_sets_and_clears_price(module, system):
    a = _create(module, 1)
    module.ask(Origin.signed(1), a, 50)
    assert module.kitty_price(a) == 50
    assert system.events[-1] == Ask(1, a, 50)
    module.ask(Origin.signed(1), a, None)
    assert module.kitty_price(a) is None
    assert system.events[-1] == Ask(1, a, None)


def test_ask_by_non_owner_fails(module):
    a = _create(module, 1)
    with pytest.raises(DispatchError, match="Only owner can set price for kitty"):
        module.ask(Origin.signed(2), a, 10)
    assert module.kitty_price(a) is None


def test_buy_pays_owner_and_transfers(module, balances, system):
    a = _create(module, 1)
    balances.set_balance(2, 100)
    module.ask(Origin.signed(1), a, 40)
    module.buy(Origin.signed(2), a, 60)
    assert module.kitty_owner(a) == 2
    assert module.kitty_price(a) is None
    assert balances.free_balance(1) == 40
    assert balances.free_balance(2) == 60
    assert module.owned_kitty_ids(2) == [a]
    assert module.owned_kitty_ids(1) == []
    assert system.events[-1] == Sold(1, 2, a, 40)


def test_buy_errors(module, balances):
    with pytest.raises(DispatchError, match="Kitty does not exist"):
        module.buy(Origin.signed(2), 0, 10)
    a = _create(module, 1)
    with pytest.raises(DispatchError, match="Kitty not for sale"):
        module.buy(Origin.signed(2), a, 10)
    module.ask(Origin.signed(1), a, 40)
    with pytest.raises(DispatchError, match="Price is too low"):
        module.buy(Origin.signed(2), a, 39)
    assert module.kitty_owner(a) == 1


def test_buy_without_funds_keeps_kitty(module, balances):
    a = _create(module, 1)
    balances.set_balance(2, 10)
    module.ask(Origin.signed(1), a, 40)
    with pytest.raises(DispatchError):
        module.buy(Origin.signed(2), a, 40)
    assert module.kitty_owner(a) == 1
    assert module.kitty_price(a) == 40
    assert balances.free_balance(2) == 10