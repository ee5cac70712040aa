"""Tests for message body classification."""

from ipaddress import IPv4Address

import pytest

from srcdslog.messages import MESSAGE_PARSERS, classify
from srcdslog.models import (
    ChatMessage,
    MapLoading,
    MapStarted,
    PlayerConnected,
    PlayerDisconnected,
    PlayerIdentity,
    PlayerJoinedTeam,
    PlayerVsPlayerAction,
    RemoteConsoleCommand,
    ServerCvar,
    ServerCvarsEnd,
    ServerCvarsStart,
    ServerLogClosed,
    ServerLogStarted,
    Unrecognized,
)

ALICE = '"Alice<6><[U:1:1324124512]><>"'
BOB = '"Bob<7><[U:1:42]><Blue>"'
ALICE_ID = PlayerIdentity(name="Alice", uid=6, steamid="[U:1:1324124512]", team="")
BOB_ID = PlayerIdentity(name="Bob", uid=7, steamid="[U:1:42]", team="Blue")


class TestServerLifecycle:
    def test_log_file_started(self):
        event = classify(
            'Log file started (file "logs/L0209000.log") (game "/home/steam/tf2/tf") '
            '(version "8622567")'
        )
        assert event == ServerLogStarted(
            file="logs/L0209000.log", game="/home/steam/tf2/tf", version="8622567"
        )

    def test_log_file_started_requires_three_pairs(self):
        event = classify('Log file started (file "logs/L0209000.log") (game "/tf")')
        assert event == Unrecognized()

    def test_log_file_closed(self):
        assert classify("Log file closed.") == ServerLogClosed()

    def test_cvars_start_end(self):
        assert classify("server cvars start") == ServerCvarsStart()
        assert classify("Server cvars end") == ServerCvarsEnd()

    def test_server_cvar_assignment(self):
        assert classify('"mp_friendlyfire" = "0"') == ServerCvar(
            name="mp_friendlyfire", value="0"
        )

    def test_server_cvar_change(self):
        assert classify('Server cvar "mp_timelimit" = "30"') == ServerCvar(
            name="mp_timelimit", value="30"
        )

    def test_server_cvar_prefixed(self):
        assert classify('server_cvar: "sv_password" "***PROTECTED***"') == ServerCvar(
            name="sv_password", value="***PROTECTED***"
        )

    def test_server_cvar_empty_value(self):
        assert classify('"sv_tags" = ""') == ServerCvar(name="sv_tags", value="")

    def test_player_name_with_assignment_is_not_a_cvar(self):
        event = classify('"A" = "B<3><[U:1:7]><Red>" joined team "Blue"')
        assert event == PlayerJoinedTeam(
            player=PlayerIdentity(name='A" = "B', uid=3, steamid="[U:1:7]", team="Red"),
            team="Blue",
        )


class TestMapLifecycle:
    def test_loading_map(self):
        assert classify('Loading map "ctf_2fort"') == MapLoading(name="ctf_2fort")

    def test_started_map(self):
        event = classify('Started map "koth_highpass" (CRC "505b4fbf2a1661d2fb1b96f444ef268c")')
        assert event == MapStarted(
            name="koth_highpass", checksum="505b4fbf2a1661d2fb1b96f444ef268c"
        )

    def test_started_map_without_crc(self):
        assert classify('Started map "koth_highpass"') == Unrecognized()


class TestRcon:
    def test_rcon_command(self):
        event = classify('rcon from "10.0.0.5:51234": command "status"')
        assert event == RemoteConsoleCommand(
            address=IPv4Address("10.0.0.5"), port=51234, command="status"
        )

    def test_rcon_phrase_is_case_insensitive(self):
        event = classify('Rcon from "10.0.0.5:51234": command "sm_kick bob"')
        assert isinstance(event, RemoteConsoleCommand)
        assert event.command == "sm_kick bob"

    def test_rcon_port_out_of_range(self):
        assert classify('rcon from "10.0.0.5:70000": command "status"') == Unrecognized()

    def test_rcon_requires_port(self):
        assert classify('rcon from "10.0.0.5": command "status"') == Unrecognized()

    def test_bad_rcon(self):
        assert classify('Bad Rcon: "rcon 1 "x" status" from "10.0.0.5:1"') == Unrecognized()


class TestPlayerMessages:
    def test_chat(self):
        assert classify(ALICE + ' say "gg"') == ChatMessage(
            sender=ALICE_ID, text="gg", team_only=False
        )

    def test_team_chat(self):
        assert classify(BOB + ' say_team "push cart"') == ChatMessage(
            sender=BOB_ID, text="push cart", team_only=True
        )

    def test_chat_with_shape_text_inside(self):
        event = classify(ALICE + ' say "joined team "Red""')
        assert isinstance(event, ChatMessage)
        assert event.text == "joined team "

    def test_connected(self):
        event = classify(ALICE + ' connected, address "192.168.0.1:27015"')
        assert event == PlayerConnected(
            player=ALICE_ID, address=IPv4Address("192.168.0.1"), port=27015
        )

    def test_connected_without_port(self):
        assert classify(ALICE + ' connected, address "192.168.0.1"') == Unrecognized()

    def test_connected_bot(self):
        assert classify(ALICE + ' connected, address "none"') == Unrecognized()

    def test_disconnected(self):
        event = classify(BOB + ' disconnected (reason "Disconnect by user.")')
        assert event == PlayerDisconnected(player=BOB_ID, reason="Disconnect by user.")

    def test_disconnected_requires_closing_paren(self):
        assert classify(BOB + ' disconnected (reason "timed out"') == Unrecognized()

    def test_joined_team(self):
        event = classify(ALICE + ' joined team "Red"')
        assert event == PlayerJoinedTeam(player=ALICE_ID, team="Red")

    @pytest.mark.parametrize("action", ["domination", "revenge"])
    def test_player_vs_player(self, action):
        event = classify(f'{ALICE} triggered "{action}" against {BOB}')
        assert event == PlayerVsPlayerAction(actor=ALICE_ID, action=action, target=BOB_ID)

    def test_player_vs_player_with_trailing_text(self):
        event = classify(f'{ALICE} triggered "revenge" against {BOB} (assist "1")')
        assert isinstance(event, PlayerVsPlayerAction)
        assert event.target == BOB_ID

    def test_triggered_without_target(self):
        assert classify(f'{ALICE} triggered "player_builtobject"') == Unrecognized()

    def test_name_with_angle_bracket(self):
        assert classify('"a<b<3><[U:1:7]><>" joined team "Red"') == Unrecognized()


class TestDispatch:
    def test_unrecognized_custom_line(self):
        event = classify('[SM] Loaded plugin "funcommands.smx"')
        assert event == Unrecognized()
        assert event.is_unrecognized

    def test_recognized_event_is_not_unrecognized(self):
        assert not classify("Log file closed").is_unrecognized

    def test_empty_body(self):
        assert classify("") == Unrecognized()

    def test_never_raises_on_garbage(self):
        for body in ['"', "(", '"<1><[U:1:1]><>"', "\x00�", "rcon from "]:
            classify(body)

    def test_phrase_must_be_at_start(self):
        assert classify(' Log file closed') == Unrecognized()

    def test_player_shapes_are_case_sensitive(self):
        assert classify(ALICE + ' Joined Team "Red"') == Unrecognized()

    def test_parser_order(self):
        names = [parser.__name__ for parser in MESSAGE_PARSERS]
        assert names.index("inter_player_action") < names.index("join_team_message")
        assert names.index("chat_message") < names.index("join_team_message")
        assert names[-1] == "join_team_message"
        assert names[0] == "log_file_started"
