import pytest

from application_service.domain.entities import ChatGroup, Group, GroupMember, Message, Page, User
from application_service.domain.enums import ChatGroupType, MemberRole, MessageStatus, MessageType
from application_service.domain.exceptions import InvalidArgument


@pytest.fixture
def text_message():
    return Message(id=1, sender_id=1, group_id=1, content="Oi")


class TestMessage:
    @pytest.mark.parametrize(
        "status", [MessageStatus.SENT, MessageStatus.DELIVERED, MessageStatus.READ]
    )
    def test_mark_as_read_from_any_status(self, text_message, status):
        text_message.status = status
        text_message.mark_as_read()
        assert text_message.status == MessageStatus.READ

    def test_mark_as_delivered_from_sent(self, text_message):
        text_message.mark_as_delivered()
        assert text_message.status == MessageStatus.DELIVERED

    @pytest.mark.parametrize("status", [MessageStatus.DELIVERED, MessageStatus.READ])
    def test_mark_as_delivered_is_noop_after_sent(self, text_message, status):
        text_message.status = status
        text_message.mark_as_delivered()
        assert text_message.status == status
        assert text_message.updated_at is None

    def test_validate_rejects_empty_text(self):
        with pytest.raises(InvalidArgument):
            Message(id=None, sender_id=1, group_id=1, content="   ").validate()

    def test_validate_requires_file_for_media(self):
        message = Message(id=None, sender_id=1, group_id=1, type=MessageType.AUDIO)
        with pytest.raises(InvalidArgument, match="arquivo"):
            message.validate()

        message.file_url = "https://files.example.com/audio.ogg"
        assert message.validate() is True

    def test_validate_rejects_long_content(self):
        message = Message(id=None, sender_id=1, group_id=1, content="a" * 4001)
        with pytest.raises(InvalidArgument):
            message.validate()

    def test_edit_trims_and_marks_edited(self, text_message):
        text_message.edit("  novo texto ")
        assert text_message.content == "novo texto"
        assert text_message.is_edited()

    def test_edit_rejects_media(self):
        message = Message(
            id=1, sender_id=1, group_id=1, type=MessageType.IMAGE, file_url="x.png"
        )
        with pytest.raises(InvalidArgument):
            message.edit("legenda")

    def test_soft_delete_redacts_external_representation(self):
        message = Message(
            id=1,
            sender_id=1,
            group_id=1,
            type=MessageType.FILE,
            content="contrato",
            file_url="https://files.example.com/c.pdf",
            file_name="c.pdf",
            file_size=10,
        )
        message.delete()

        assert message.is_deleted is True
        assert message.deleted_at is not None
        data = message.to_dict()
        assert data["content"] is None
        assert data["file_url"] is None
        assert data["file_name"] is None
        assert data["file_size"] is None
        assert data["is_deleted"] is True

        with pytest.raises(InvalidArgument):
            message.edit("de novo")


class TestChatGroup:
    def test_validate_name_length(self):
        with pytest.raises(InvalidArgument):
            ChatGroup(id=None, name="A", created_by_id=1).validate()

    def test_direct_chat_needs_two_members(self):
        group = ChatGroup(id=None, name="Ana & Bia", created_by_id=1, type=ChatGroupType.DIRECT)
        with pytest.raises(InvalidArgument):
            group.validate()

        group.max_members = 2
        assert group.validate() is True
        assert group.is_direct_chat()

    def test_deactivate_and_activate(self):
        group = ChatGroup(id=1, name="Turma", created_by_id=1)
        group.deactivate()
        assert group.is_active is False
        assert group.updated_at is not None
        group.activate()
        assert group.is_active is True

    def test_update_info_revalidates(self):
        group = ChatGroup(id=1, name="Turma", created_by_id=1)
        group.update_info(description="Caronas da manhã")
        assert group.description == "Caronas da manhã"
        with pytest.raises(InvalidArgument):
            group.update_info(name=" x ")


class TestGroupMember:
    def test_permissions_by_role(self):
        member = GroupMember(id=1, user_id=1, group_id=1)
        assert not member.can_delete_messages()

        moderator = GroupMember(id=2, user_id=2, group_id=1, role=MemberRole.MODERATOR)
        assert moderator.can_delete_messages()
        assert moderator.can_manage_members()
        assert not moderator.can_edit_group()

        admin = GroupMember(id=3, user_id=3, group_id=1, role=MemberRole.ADMIN)
        assert admin.can_edit_group()

    def test_promote_and_demote_follow_hierarchy(self):
        member = GroupMember(id=1, user_id=1, group_id=1)
        member.promote(MemberRole.ADMIN, promoted_by_id=9)
        assert member.role == MemberRole.ADMIN
        assert member.added_by_id == 9

        with pytest.raises(InvalidArgument):
            member.promote(MemberRole.MODERATOR, promoted_by_id=9)

        member.demote(MemberRole.MEMBER, demoted_by_id=9)
        assert member.role == MemberRole.MEMBER

        with pytest.raises(InvalidArgument):
            member.demote(MemberRole.MEMBER, demoted_by_id=9)

    def test_leave_and_rejoin(self):
        member = GroupMember(id=1, user_id=1, group_id=1)
        member.leave()
        assert member.is_active is False
        assert member.left_at is not None
        member.rejoin()
        assert member.is_active is True
        assert member.left_at is None


def test_user_to_dict_hides_password():
    user = User(id=1, name="Ana", last_name="Souza", email="a@b.com", password="hash")
    assert "password" not in user.to_dict()
    assert user.full_name() == "Ana Souza"
    assert user.address() is None


def test_group_members_are_unique():
    group = Group(id=1, name="Carona", driver_id=1)
    group.add_member(2)
    group.add_member(2)
    assert group.members == [2]
    group.remove_member(2)
    assert group.members == []


@pytest.mark.parametrize("total, limit, pages", [(0, 10, 0), (10, 10, 1), (11, 10, 2)])
def test_page_total_pages(total, limit, pages):
    assert Page(items=[], total_items=total, page=1, limit=limit).total_pages == pages
