"""시그널링 이벤트 이름.

웹 클라이언트와의 호환을 위해 이벤트 이름은 그대로 유지해야 합니다.
"""

# ============================================================
# 클라이언트 → 서버
# ============================================================

CALL_USER = "callUser"            # {userToCall, signalData, from, name}
ACCEPT_CALL = "acceptCall"        # {to, signal}
DECLINE_CALL = "declineCall"      # {to}
ICE_CANDIDATE = "iceCandidate"    # {to, candidate}
END_CALL = "endCall"              # {to}

# ============================================================
# 서버 → 클라이언트
# ============================================================

GET_ONLINE_USERS = "getOnlineUsers"   # [user_id, ...]
INCOMING_CALL = "incomingCall"        # {from, name, signal}
CALL_ACCEPTED = "callAccepted"        # signal
CALL_DECLINED = "callDeclined"        # (없음)
# ICE_CANDIDATE, END_CALL은 같은 이름으로 전달

# ============================================================
# Delivery Bridge (REST 핸들러가 사용)
# ============================================================

NEW_MESSAGE = "newMessage"
SESSION_REQUESTED = "sessionRequested"
SESSION_ACCEPTED = "sessionAccepted"
NOTIFICATION_NEW = "notification:new"
