"""Configuration constants for the ZTE ONU web-admin client."""

import os

DEFAULT_BASE_URL = "http://192.168.1.1"
# Credentials can also be supplied via ROUTER_USERNAME / ROUTER_PASSWORD env vars
DEFAULT_USER = os.environ.get("ROUTER_USERNAME", "admin")
DEFAULT_PASSWORD = os.environ.get("ROUTER_PASSWORD", "")

REQUEST_TIMEOUT = 15   # seconds per HTTP request, the only timeout policy

# Pages
TEMPLATE_PAGE      = "/template.gch"
DEFAULT_NEXT_PAGE  = "getpage.gch?pid=1002&nextpage="
WAN_STATUS_PAGE    = "status_ethwan_if_t.gch"
LAN_DHCP_PAGE      = "net_dhcp_dynamic_t.gch"
PORT_FORWARD_PAGE  = "app_virtual_conf_t.gch"

# Token-call convention:  Transfer_meaning('Field','value');
TOKEN_CALL_NAME = "Transfer_meaning"
INSTNUM_FIELD   = "IF_INSTNUM"

# Result triple reported by every .gch page
RESULT_STATUS_FIELD = "IF_ERRORSTR"
RESULT_PARAM_FIELD  = "IF_ERRORPARAM"
RESULT_KIND_FIELD   = "IF_ERRORTYPE"
RESULT_SUCCESS      = "SUCC"

# Reserved form key carrying the single-use session token
SESSION_TOKEN_KEY = "_SESSION_TOKEN"

# Login page
LOGIN_TOKEN_DEFAULT  = "1"
ERRMSG_DEFAULT       = "login might failed"
LOGIN_SUCCESS_MARKER = (
    '<iframe width="808px" height="67px" src="top.gch" name="topFrame" '
    'scrolling="no" frameborder="0" id="topFrame"></iframe>'
)

# WAN status tables
WAN_TABLE_TAG   = "div"
WAN_TABLE_CLASS = "space_0"
WAN_ROW_TAG     = "tr"
WAN_CELL_TAG    = "td"

# Wire-side literal for an absent optional string
NULL_SENTINEL = "NULL"

# Port-forward form actions
ACTION_FIELD = "IF_ACTION"
INDEX_FIELD  = "IF_INDEX"
NEW_INDEX    = "-1"

# WAN connection selector on the port-forward page
WANC_SELECT_ID  = "Frm_WANCViewName"
WANC_IPMODE_ATTR = "ipmode"
WANC_UNKNOWN_IPMODE = -1
