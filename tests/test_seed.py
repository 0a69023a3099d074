
from mock_backend import crud, models
from mock_backend.seed import seed_users


def test_seed_fills_empty_table(db_session):
    added = seed_users(db_session, floor=20)
    assert added == 20
    assert crud.count_users(db_session) == 20

    for user in crud.list_users(db_session):
        assert user.name
        assert 1 <= user.city_id <= 5
        assert 1000 <= user.balance <= 50000
        assert "@" in user.email
        assert len(user.registration_date) == 10


def test_seed_leaves_full_table_alone(db_session):
    db_session.add_all([models.User(name=f"user {i}") for i in range(25)])
    db_session.commit()

    assert seed_users(db_session, floor=20) == 0
    assert crud.count_users(db_session) == 25


def test_seed_tops_up_partial_table(db_session):
    db_session.add_all([models.User(name=f"user {i}") for i in range(7)])
    db_session.commit()

    assert seed_users(db_session, floor=20) == 13
    assert crud.count_users(db_session) == 20


def test_seeded_users_may_reference_missing_cities(db_session):
    seed_users(db_session, floor=3)
    assert db_session.query(models.City).count() == 0
    assert all(u.city_id is not None for u in crud.list_users(db_session))
